"""Format string tokenizers.

Each tokenizer turns a format string into a list of directives:

    default:  brace-delimited mnemonics, e.g. "{YYYY}-{0M}-{0D}"
    strftime: percent directives, e.g. "%Y-%m-%d"
"""

from __future__ import annotations

from chronoform.tokenizers import default, strftime

__all__ = ["default", "strftime"]
