from dataclasses import dataclass

DEFAULT_PROJECT_COLOR = '#0ea5e9'


@dataclass(frozen=True)
class ProjectInputs:
    """All project fields except the id. Used for create and full-replace update."""
    name: str
    description: str | None = None
    client: str | None = None
    color: str = DEFAULT_PROJECT_COLOR
    is_active: bool = True


@dataclass
class Project:
    """Domain model representing a client project."""
    id: int
    name: str
    description: str | None = None
    client: str | None = None
    color: str = DEFAULT_PROJECT_COLOR
    is_active: bool = True

    @classmethod
    def from_inputs(cls, project_id: int, inputs: ProjectInputs) -> 'Project':
        return cls(
            id=project_id,
            name=inputs.name,
            description=inputs.description,
            client=inputs.client,
            color=inputs.color,
            is_active=inputs.is_active,
        )
