"""Perceptual distance between two colors.

Metrics:
  deltaE2000  CIEDE2000 (default)
  deltaE94    CIE94, graphic-arts constants
  deltaE76    Euclidean distance in LAB
  euclidean   Euclidean distance in RGB

Colors closer than 2.3 (the just-noticeable difference) are reported as
similar; the threshold is always judged with deltaE2000.

Example:
    tonekit distance '#ff0000' '#fe0101'
    tonekit distance '#ff0000' 'rgb(0, 0, 255)' -m deltaE76 -j
"""

from tonekit.commands.convert import parse_color_arg
from tonekit.core.metrics import METRICS, are_colors_similar, color_distance
from tonekit.core.types import Command, Report

command = Command(name='distance', help='Measure the perceptual distance between two colors.')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('color1', help='First color')
    parser.add_argument('color2', help='Second color')
    parser.add_argument('-m', '--metric', choices=METRICS, default='deltaE2000', help='Distance metric')


@command.run
def run(args, report: Report) -> None:
    rgb1 = parse_color_arg(args.color1)
    rgb2 = parse_color_arg(args.color2)
    report.source = f'{args.color1} {args.color2}'
    report.add(
        'distance',
        {
            'metric': args.metric,
            'value': color_distance(rgb1, rgb2, args.metric),
            'similar': are_colors_similar(rgb1, rgb2),
        },
    )
