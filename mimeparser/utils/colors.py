"""
ANSI Color codes for console output formatting
"""


class Colors:
    """ANSI color codes and helper methods"""
    RESET = "\033[0m"
    BOLD = "\033[1m"

    # Text Colors
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    GREY = "\033[90m"

    @classmethod
    def colorize(cls, text: str, color: str) -> str:
        """Wrap text in color codes"""
        return f"{color}{text}{cls.RESET}"

    @classmethod
    def error(cls, text: str) -> str:
        """Format as an error (Red)"""
        return f"{cls.RED}{text}{cls.RESET}"

    @classmethod
    def for_media_type(cls, primary_type: str) -> str:
        """Get color code for a Content-Type primary type"""
        primary = primary_type.lower()
        if primary == "multipart":
            return cls.MAGENTA
        elif primary == "text":
            return cls.GREEN
        elif primary in ("image", "audio", "video"):
            return cls.YELLOW
        elif primary == "application":
            return cls.BLUE
        return cls.GREY
