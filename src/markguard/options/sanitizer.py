#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options supplied by the host editor.

The host decides once, at configuration time, whether markup is sanitized by
the built-in policy, handed to its own sanitizer function, or passed through.
See :func:`markguard.strategy.resolve_sanitizer`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from bs4 import BeautifulSoup

from markguard.constants import DEFAULT_USE_HTML_SANITIZER
from markguard.exceptions import ValidationError
from markguard.options.base import CloneFrozenMixin

if TYPE_CHECKING:
    from markguard.policy import SanitizerPolicy

CustomHtmlSanitizer = Callable[[str], Union[str, BeautifulSoup]]


# src/markguard/options/sanitizer.py
@dataclass(frozen=True)
class SanitizerOptions(CloneFrozenMixin):
    """Sanitizer configuration for one host editor instance.

    Parameters
    ----------
    use_default_html_sanitizer : bool, default True
        Sanitize with the built-in policy. When False and no custom sanitizer
        is given, markup is passed through untouched (trusted content only).
    custom_html_sanitizer : callable or None, default None
        A function receiving raw markup text and returning sanitized text or a
        BeautifulSoup fragment. When set it replaces the built-in sanitizer
        entirely, regardless of ``use_default_html_sanitizer``.
    policy : SanitizerPolicy or None, default None
        Policy for the built-in sanitizer. None uses the shared default policy.

    Examples
    --------
    Keep the default sanitizer but allow case-sensitive names:

        >>> from markguard.policy import SanitizerPolicy
        >>> options = SanitizerOptions(policy=SanitizerPolicy(case_sensitive=True))

    Delegate to an application sanitizer:

        >>> options = SanitizerOptions(custom_html_sanitizer=lambda html: html.replace("<", "&lt;"))

    """

    use_default_html_sanitizer: bool = field(
        default=DEFAULT_USE_HTML_SANITIZER,
        metadata={
            "help": "Sanitize HTML with the built-in policy",
            "importance": "security",
        },
    )
    custom_html_sanitizer: CustomHtmlSanitizer | None = field(
        default=None,
        metadata={
            "help": "Function replacing the built-in sanitizer (receives raw markup text)",
            "importance": "advanced",
        },
    )
    policy: SanitizerPolicy | None = field(
        default=None,
        metadata={
            "help": "Policy for the built-in sanitizer (None uses the default policy)",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        ValidationError
            If ``custom_html_sanitizer`` is not callable or ``policy`` is not a SanitizerPolicy.

        """
        from markguard.policy import SanitizerPolicy

        if self.custom_html_sanitizer is not None and not callable(self.custom_html_sanitizer):
            raise ValidationError(
                "custom_html_sanitizer must be callable",
                parameter_name="custom_html_sanitizer",
                parameter_value=self.custom_html_sanitizer,
            )

        if self.policy is not None and not isinstance(self.policy, SanitizerPolicy):
            raise ValidationError(
                f"policy must be a SanitizerPolicy, got '{type(self.policy).__name__}'",
                parameter_name="policy",
                parameter_value=self.policy,
            )
