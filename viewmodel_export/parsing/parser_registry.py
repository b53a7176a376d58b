"""
Parser Registry for Tree-sitter

Manages language-specific parsers and provides a unified interface.
"""

import logging

try:
    from tree_sitter import Parser
    from tree_sitter_language_pack import get_language
except ImportError as e:
    raise ImportError(
        "tree-sitter-language-pack is required. " "Install with: pip install tree-sitter tree-sitter-language-pack"
    ) from e

logger = logging.getLogger(__name__)

CSHARP = "csharp"


class ParserRegistry:
    """
    Registry for language parsers.

    Supports:
    - C# (the model source language)
    """

    def __init__(self):
        self._parsers: dict[str, Parser] = {}
        self._languages: dict[str, object] = {}
        self._setup_languages()

    def _register_language(self, name: str, aliases: list[str] | None = None) -> None:
        """
        Register a language and its aliases.

        Args:
            name: Language name as known to tree-sitter-language-pack (e.g., "csharp")
            aliases: Optional list of aliases (e.g., ["cs"] for csharp)
        """
        try:
            lang = get_language(name)
            self._languages[name] = lang

            if aliases:
                for alias in aliases:
                    self._languages[alias] = lang

            logger.debug(f"Loaded {name} parser" + (f" with aliases {aliases}" if aliases else ""))
        except Exception as e:
            logger.warning(f"Failed to load {name} parser: {e}")

    def _setup_languages(self):
        """Setup Tree-sitter languages"""
        self._register_language(CSHARP, ["cs", "c_sharp", "c#"])

    def get_parser(self, language: str) -> Parser | None:
        """
        Get parser for the specified language.

        Args:
            language: Language name (csharp or one of its aliases)

        Returns:
            Parser instance or None if language not supported
        """
        language = language.lower()

        # Return cached parser
        if language in self._parsers:
            return self._parsers[language]

        lang = self._languages.get(language)
        if not lang:
            return None

        parser = Parser(lang)
        self._parsers[language] = parser
        return parser


# Global registry instance
_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        _registry = ParserRegistry()
    return _registry
