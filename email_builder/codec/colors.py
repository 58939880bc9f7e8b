"""CSS color validation used by the background codec."""
from __future__ import annotations

import re
from typing import FrozenSet

NAMED_COLORS: FrozenSet[str] = frozenset(
    """
    aliceblue antiquewhite aqua aquamarine azure beige bisque black blanchedalmond blue
    blueviolet brown burlywood cadetblue chartreuse chocolate coral cornflowerblue cornsilk
    crimson cyan darkblue darkcyan darkgoldenrod darkgray darkgreen darkgrey darkkhaki
    darkmagenta darkolivegreen darkorange darkorchid darkred darksalmon darkseagreen
    darkslateblue darkslategray darkslategrey darkturquoise darkviolet deeppink deepskyblue
    dimgray dimgrey dodgerblue firebrick floralwhite forestgreen fuchsia gainsboro ghostwhite
    gold goldenrod gray green greenyellow grey honeydew hotpink indianred indigo ivory khaki
    lavender lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
    lightgoldenrodyellow lightgray lightgreen lightgrey lightpink lightsalmon lightseagreen
    lightskyblue lightslategray lightslategrey lightsteelblue lightyellow lime limegreen linen
    magenta maroon mediumaquamarine mediumblue mediumorchid mediumpurple mediumseagreen
    mediumslateblue mediumspringgreen mediumturquoise mediumvioletred midnightblue mintcream
    mistyrose moccasin navajowhite navy oldlace olive olivedrab orange orangered orchid
    palegoldenrod palegreen paleturquoise palevioletred papayawhip peachpuff peru pink plum
    powderblue purple rebeccapurple red rosybrown royalblue saddlebrown salmon sandybrown
    seagreen seashell sienna silver skyblue slateblue slategray slategrey snow springgreen
    steelblue tan teal thistle tomato turquoise violet wheat white whitesmoke yellow
    yellowgreen transparent currentcolor
    """.split()
)

_HEX_PATTERN = re.compile(r"^#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?"
_FUNCTION_PATTERN = re.compile(r"^(rgba?|hsla?)\((.*)\)$", re.DOTALL)
_NUMBER_PATTERN = re.compile(rf"^{_NUMBER}$")
_PERCENT_PATTERN = re.compile(rf"^{_NUMBER}%$")
_HUE_PATTERN = re.compile(rf"^{_NUMBER}(?:deg|grad|rad|turn)?$")


def is_color(value: object) -> bool:
    """Return True when ``value`` would be accepted by a CSS ``color`` property."""
    if not isinstance(value, str):
        return False
    candidate = value.strip().lower()
    if not candidate:
        return False
    if candidate in NAMED_COLORS:
        return True
    if candidate.startswith("#"):
        return _HEX_PATTERN.match(candidate) is not None
    match = _FUNCTION_PATTERN.match(candidate)
    if match is None:
        return False
    return _valid_function_args(match.group(1), match.group(2))


def _valid_function_args(name: str, args: str) -> bool:
    body, _, alpha = args.partition("/")
    if "," in body:
        if alpha:
            return False
        parts = [part.strip() for part in body.split(",")]
    else:
        parts = body.split()
    if alpha:
        alpha_parts = alpha.split()
        if len(alpha_parts) != 1:
            return False
        parts.append(alpha_parts[0])
    if len(parts) not in (3, 4):
        return False
    channels, alpha_value = parts[:3], parts[3:]
    if name.startswith("rgb"):
        uses_percent = [bool(_PERCENT_PATTERN.match(part)) for part in channels]
        if any(uses_percent) and not all(uses_percent):
            return False
        if not all(uses_percent) and not all(_NUMBER_PATTERN.match(part) for part in channels):
            return False
    else:
        hue, saturation, lightness = channels
        if not _HUE_PATTERN.match(hue):
            return False
        if not (_PERCENT_PATTERN.match(saturation) and _PERCENT_PATTERN.match(lightness)):
            return False
    return all(_NUMBER_PATTERN.match(part) or _PERCENT_PATTERN.match(part) for part in alpha_value)
