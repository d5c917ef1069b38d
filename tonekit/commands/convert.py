"""Convert a color between representations.

Accepts hex (#rgb, #rrggbb, with or without #), rgb()/rgba() and
hsl()/hsla(). Prints rgb, hex, hsl, hsv, xyz, lab and hct.

Example:
    tonekit convert '#3366cc'
    tonekit convert 'hsl(210, 60%, 50%)' -j
"""

from tonekit.core.conversions import parse_color, rgb_to_hex, rgb_to_hsl, rgb_to_hsv, rgb_to_lab, rgb_to_xyz
from tonekit.core.hct import rgb_to_hct
from tonekit.core.types import Command, Report, Rgb

command = Command(name='convert', help='Convert a color to rgb, hex, hsl, hsv, xyz, lab and hct.')


def parse_color_arg(text: str) -> Rgb:
    """parse_color() for command-line input; raises ValueError when unrecognised."""
    rgb = parse_color(text)
    if rgb is None:
        raise ValueError(f'Unrecognised color: {text!r}')
    return rgb


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('color', help='Color to convert')


@command.run
def run(args, report: Report) -> None:
    rgb = parse_color_arg(args.color)
    hct = rgb_to_hct(rgb)
    report.source = args.color
    report.add(
        'convert',
        {
            'rgb': list(rgb),
            'hex': rgb_to_hex(rgb),
            'hsl': list(rgb_to_hsl(rgb)),
            'hsv': list(rgb_to_hsv(rgb)),
            'xyz': [round(v, 4) for v in rgb_to_xyz(rgb)],
            'lab': [round(v, 4) for v in rgb_to_lab(rgb)],
            'hct': [round(hct.h, 4), round(hct.c, 4), round(hct.t, 4)],
        },
    )
