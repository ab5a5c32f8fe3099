"""Install AI development skills from GitHub into your editor."""

__version__ = "1.0.0"
