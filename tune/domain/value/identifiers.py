"""Strongly typed identifiers for tune domain entities.

User ids are assigned by the store on creation. They are never taken
from caller-supplied profile data.
"""

from typing import NewType

UserId = NewType("UserId", int)
