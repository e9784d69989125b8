"""Configuration module for Scriptflow."""

from scriptflow.config.loader import ConfigLoader
from scriptflow.config.models import MessagesConfig, ScriptflowConfig, Settings

__all__ = ["ConfigLoader", "MessagesConfig", "ScriptflowConfig", "Settings"]
