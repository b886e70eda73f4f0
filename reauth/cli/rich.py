from rich.console import Console
from rich.highlighter import ReprHighlighter
from rich.theme import Theme


class ReauthHighlighter(ReprHighlighter):
    highlights = ReprHighlighter.highlights + [r"(?P<rule_path>(?<![\w/])/[\w\-./]*)"]


def get_console(stderr: bool = False) -> Console:
    return Console(
        stderr=stderr,
        highlighter=ReauthHighlighter(),
        theme=Theme({"repr.rule_path": "bold light_sea_green"}),
    )
