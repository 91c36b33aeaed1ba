"""
User prompting adapters.
"""
from .prompter import ConsolePrompter, ScriptedPrompter

__all__ = ['ConsolePrompter', 'ScriptedPrompter']
