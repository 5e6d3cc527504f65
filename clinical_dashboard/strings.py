"""String helpers for display names."""


def snake_case_file_to_title_case(file_name: str) -> str:
    """Turn ``some_file_name.ext`` into ``Some File Name``."""
    stem = file_name.split(".")[0]
    return " ".join(word[:1].upper() + word[1:].lower() for word in stem.split("_"))