from .project import ProjectSettings, get_project_settings

__all__ = ["ProjectSettings", "get_project_settings"]
