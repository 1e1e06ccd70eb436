"""Indentation-aware parser for the Result section of a help document.

Result lines nest under the most recent shallower-indented line. Depth can
jump by any amount in either direction, so nesting is tracked with an
explicit stack of (depth, children) frames rather than recursion.
"""

import logging

from rpcdoc.parser.base import COMPOSITE_TYPES, Result
from rpcdoc.parser.patterns import (
    hint_is_optional,
    infer_result_type,
    leading_depth,
    match_result_field,
)

logger = logging.getLogger(__name__)

_ROOT_DEPTH = -1


def none_result() -> Result:
    """The synthetic node standing for 'no structured result'."""
    return Result(type="none")


class ResultTreeBuilder:
    """Builds an ordered forest of result nodes from indented lines.

    Each frame owns the children of the last node appended to the frame
    below it. A line at depth d closes every frame whose owner sits at depth
    d or deeper, so siblings at equal depth never nest and out-dented levels
    are always closed completely.
    """

    def __init__(self, condition: str = ""):
        self.condition = condition
        self._stack: list[tuple[int, list[dict]]] = [(_ROOT_DEPTH, [])]

    def feed(self, line: str) -> None:
        payload = line.strip()
        if not payload:
            return
        field = match_result_field(payload)
        if field is None:
            logger.debug("Skipping result line: %r", payload)
            return

        depth = leading_depth(line)
        while depth <= self._stack[-1][0]:
            self._close_frame()

        node = {
            "type": infer_result_type(field.hint),
            "optional": hint_is_optional(field.hint),
            "key_name": field.key_name,
            "description": field.description,
            "inner": [],
        }
        if len(self._stack) == 1 and self.condition:
            node["condition"] = self.condition
        self._stack[-1][1].append(node)
        self._stack.append((depth, []))

    def finish(self) -> list[Result]:
        """Flush every open frame and return the forest (possibly empty)."""
        while len(self._stack) > 1:
            self._close_frame()
        roots = self._stack[0][1]
        self._stack = [(_ROOT_DEPTH, [])]
        return [Result.model_validate(node) for node in roots]

    def _close_frame(self) -> None:
        _, children = self._stack.pop()
        if not children:
            return
        owner = self._stack[-1][1][-1]
        if owner["type"] not in COMPOSITE_TYPES:
            logger.debug(
                "Promoting %r from %s to object: it has nested fields",
                owner["key_name"], owner["type"],
            )
            owner["type"] = "object"
        owner["inner"].extend(children)


def build_result_tree(lines: list[str], condition: str = "") -> list[Result]:
    """Parse one Result section into a forest of nodes (empty if nothing matched)."""
    builder = ResultTreeBuilder(condition=condition)
    for line in lines:
        builder.feed(line)
    return builder.finish()
