from pydantic import BaseModel, field_validator

from pcpreset.config import DEFAULT_DESCRIPTION
from pcpreset.naming import PROJECT_NAME_ERROR, is_valid_project_name


class ProjectAnswers(BaseModel):
    """
    Answers collected from the user for a new project.

    Attributes:
    * `pro_name`: Project (package and directory) name.
    * `zh_name`: Human-readable (Chinese) project description, used as the page title.
    * `version`: Template registry key.
    """

    pro_name: str
    zh_name: str = DEFAULT_DESCRIPTION
    version: str

    @field_validator("pro_name")
    @classmethod
    def validate_pro_name(cls, v: str) -> str:
        if not is_valid_project_name(v):
            raise ValueError(PROJECT_NAME_ERROR)
        return v

    @field_validator("zh_name")
    @classmethod
    def default_zh_name(cls, v: str) -> str:
        return v if v.strip() else DEFAULT_DESCRIPTION


__all__ = ["ProjectAnswers"]
