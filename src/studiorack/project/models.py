"""Project manifest model."""

from pydantic import BaseModel, ConfigDict, Field


class ProjectConfig(BaseModel):
    """A music project's manifest (project.json).

    ``plugins`` maps plugin id to the installed version. Keys the tool does
    not know about are kept so that saving never drops user data.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str = ""
    description: str = ""
    version: str = "1.0.0"
    author: str | None = None
    tags: list[str] = Field(default_factory=list)
    main: str | None = None  # Main project file opened by `studiorack start`
    plugins: dict[str, str] = Field(default_factory=dict)
