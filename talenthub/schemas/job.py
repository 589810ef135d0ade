# talenthub/schemas/job.py

import re
from datetime import datetime
from typing import List, Literal

from pydantic import Field

from talenthub.schemas.assessment import CamelModel, utcnow


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


class Job(CamelModel):
    id: str
    title: str
    slug: str = ""
    description: str = ""
    responsibilities: List[str] = Field(default_factory=list)
    qualifications: List[str] = Field(default_factory=list)
    status: Literal["active", "archived"] = "active"
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    order: int = 0
