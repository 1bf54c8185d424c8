"""Simple prompt loader for reading markdown prompt templates as-is."""
from pathlib import Path
from typing import Dict, Optional


class PromptLoader:
    """Loads ``system.md``/``user.md`` pairs from ``prompts/<name>/`` without processing them."""

    def __init__(self, prompts_dir: Optional[Path] = None):
        self._cache: Dict[str, Dict[str, str]] = {}
        self._prompts_dir = prompts_dir or Path(__file__).parent.parent.parent / "prompts"

    def load_prompt(self, prompt_name: str) -> Dict[str, str]:
        """
        Load a prompt pair to be filled in by the caller.

        Args:
            prompt_name: Name of the prompt directory

        Returns:
            Mapping with ``system`` and ``user`` template text
        """
        if prompt_name in self._cache:
            return self._cache[prompt_name]

        system = self._prompts_dir / prompt_name / "system.md"
        user = self._prompts_dir / prompt_name / "user.md"

        if not system.exists():
            raise FileNotFoundError(f"Prompt system file not found: {prompt_name}")
        if not user.exists():
            raise FileNotFoundError(f"Prompt user file not found: {prompt_name}")

        with open(system, "r", encoding="utf-8") as file:
            system_content = file.read()
        with open(user, "r", encoding="utf-8") as file:
            user_content = file.read()

        self._cache[prompt_name] = {"system": system_content, "user": user_content}
        return self._cache[prompt_name]


# Global instance for easy importing
prompt_loader = PromptLoader()


def load_prompt(prompt_name: str) -> Dict[str, str]:
    """Convenience function to load a prompt."""
    return prompt_loader.load_prompt(prompt_name)
