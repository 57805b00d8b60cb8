from typing import Annotated, Literal
from fastapi import Query

from pydantic import BaseModel, Field

from nist_sts.core.config import app_config

NistTestType = Literal['frequency', 'longest_runs', 'overlapping_template']

ALL_NIST_TESTS: list[NistTestType] = ['frequency', 'longest_runs', 'overlapping_template']


class NistRequestSchema(BaseModel):
    sequence: str | None = Field(None)
    included_tests: list[NistTestType] = Field(default_factory=lambda: ALL_NIST_TESTS.copy())
    template_length: int = Field(default_factory=lambda: app_config.OVERLAPPING_TEMPLATE_LENGTH)
    number_of_blocks: int = Field(default_factory=lambda: app_config.OVERLAPPING_TEMPLATE_BLOCKS)
    report: bool = False


NIST_REQ_SCHEMA = Annotated[NistRequestSchema, Query()]
