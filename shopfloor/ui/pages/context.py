from __future__ import annotations

from dataclasses import dataclass

from shopfloor.config import DataSource, PageConfig


@dataclass
class PageContext:
    page: PageConfig
    source: DataSource
