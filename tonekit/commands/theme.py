"""Derive UI theme roles from an image.

Runs extraction at high quality (8 colors, filtering, scoring and dislike
fixing all on), then assigns roles from the ordered result:

  primary    the top-ranked color
  secondary  the most hue-distant of ranks 2-4
  tertiary   the color furthest from both primary and secondary
  neutral    the first color with chroma < 20
  error      the first color with a red hue (350-40 degrees)

One color may fill several roles. Roles with no candidate are omitted.

With -t, each role is also rendered as a tonal palette at the given tones.

Example:
    tonekit theme screenshot.png
    tonekit theme screenshot.png -t 10 40 90 -j
"""

from tonekit.core.conversions import rgb_to_hex
from tonekit.core.extract import extract_theme_palette
from tonekit.core.tonal import TonalPalette
from tonekit.core.types import Command, Report
from tonekit.loader import load_image

command = Command(name='theme', help='Derive primary/secondary/tertiary/neutral/error roles from an image.')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Path to image (any format Pillow reads)')
    parser.add_argument(
        '-t', '--tones', type=float, nargs='+', metavar='TONE', help='Render each role at these tones (0-100)'
    )


@command.run
def run(args, report: Report) -> None:
    roles = extract_theme_palette(load_image(args.image)).roles()
    report.add('theme', {role: color.to_dict() for role, color in roles.items()})

    if args.tones:
        tones = {}
        for role, color in roles.items():
            palette = TonalPalette(color.hct.h, color.hct.c)
            tones[role] = {f'{t:g}': rgb_to_hex(palette.tone(t)) for t in args.tones}
        report.add('tones', tones)
