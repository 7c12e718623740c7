"""Data Access Object (DAO) module."""
from .setting_dao import SettingDAO
from .workspace_dao import WorkspaceDAO

__all__ = ["SettingDAO", "WorkspaceDAO"]
