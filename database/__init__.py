"""Database package.

`models` holds the coaching tables; `init_db` creates them and the two
session factories split writes from (possibly replicated) reads.
"""

from . import models
from .database import ReadSessionLocal, WriteSessionLocal, init_db

__all__ = ["models", "init_db", "WriteSessionLocal", "ReadSessionLocal"]
