from typing import Optional

from src.shared.result import Error

MAX_GROUP_NAME_LENGTH = 100
MAX_GROUP_DESCRIPTION_LENGTH = 1000


def check_group_details(name: Optional[str], description: Optional[str]) -> Optional[Error]:
    if not name or not name.strip() or len(name.strip()) > MAX_GROUP_NAME_LENGTH:
        return Error(
            "INVALID_GROUP_NAME",
            f"Group name must be between 1 and {MAX_GROUP_NAME_LENGTH} characters",
        )
    if description and len(description) > MAX_GROUP_DESCRIPTION_LENGTH:
        return Error(
            "INVALID_GROUP_DESCRIPTION",
            f"Group description must be {MAX_GROUP_DESCRIPTION_LENGTH} characters or less",
        )
    return None
