from typing import Iterable

REQUIRED_HASHTAGS = ("#GlossyTransition", "#LorealIndia", "#GlycolicGloss")


def validate_hashtags(hashtags: Iterable[str]) -> bool:
    """True when every required hashtag is present, compared case-insensitively."""
    present = {tag.lower() for tag in hashtags}
    return all(required.lower() in present for required in REQUIRED_HASHTAGS)


def missing_hashtags_message() -> str:
    return "Content must include required hashtags: " + ", ".join(REQUIRED_HASHTAGS)


def guess_content_type(platform: str, path: str) -> str:
    parts = [p for p in path.split("/") if p]
    if platform == "instagram" and parts and parts[0] == "reel":
        return "reel"
    if platform == "youtube":
        return "video"
    return "post"
