"""Output compilation: Go registration fragments and the summary document."""

from devtmpl.compile.literal import eval_go_literal, go_raw_literal, go_string_literal
from devtmpl.compile.output import write_output
from devtmpl.compile.source import SourceRenderer, fragment_path
from devtmpl.compile.summary import SummaryRenderer
from devtmpl.compile.templates import TemplateEngine, filter_helper, indent_helper

__all__ = [
    "SourceRenderer",
    "SummaryRenderer",
    "TemplateEngine",
    "eval_go_literal",
    "filter_helper",
    "fragment_path",
    "go_raw_literal",
    "go_string_literal",
    "indent_helper",
    "write_output",
]
