# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Runtime options of the resolver.

`ResolverConfig` is a pydantic model so it can be embedded in grammar files
(`resolver:` section) and validated along with them, or built directly:

    config = ResolverConfig(max_branches=256, strict=True)
    outcome = command.parse(tokens, config)
"""
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_BRANCHES = 4096


class ResolverConfig(BaseModel):
    """
    Options controlling one `parse` call.

    Attributes:
        max_branches (int): Ceiling on live candidate interpretations.
        strict (bool): Raise `AmbiguousCommandError` instead of returning an
            ambiguous outcome.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_branches: int = Field(default=DEFAULT_MAX_BRANCHES, ge=1)
    strict: bool = False
