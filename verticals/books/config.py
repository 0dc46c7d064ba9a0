"""Books vertical configuration.

Re-exports BooksConfig from the patterns module, demonstrating how
verticals use the domain config pattern.
"""

from patterns.domain_config import BooksConfig

# Process-wide configuration, read once from the environment
config = BooksConfig.from_env()
