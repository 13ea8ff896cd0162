"""Prompt Construction Package"""

from aicommit.prompts.builder import SYSTEM_PROMPT, build_messages, user_prompt

__all__ = ["SYSTEM_PROMPT", "build_messages", "user_prompt"]
