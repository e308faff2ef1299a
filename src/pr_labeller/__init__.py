"""PR labeller.

Labels closed GitHub pull requests by matching each PR title against an ordered
list of category tags, with:
- configuration loaded from the environment or `.env`
- structured logging
- a concurrent producer/worker labelling pipeline
- a `create` command that sets up repository labels from a JSON file
"""

__version__ = "0.1.0"

from pr_labeller.labeller.config import LabellerSettings

__all__ = ["__version__", "LabellerSettings"]
