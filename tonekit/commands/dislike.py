"""Check colors against the disliked dark yellow-green zone.

A color is disliked when its rounded HCT hue is 90-111, chroma is above 16
and tone is below 65. With --fix, disliked colors are lightened to tone 70,
keeping hue and chroma where the gamut allows.

Accepts hex, rgb() and hsl() colors.

Example:
    tonekit dislike '#6b6b00' '#3366cc'
    tonekit dislike '#6b6b00' --fix -j
"""

from tonekit.commands.convert import parse_color_arg
from tonekit.core.conversions import argb_from_rgb
from tonekit.core.dislike import DislikeAnalyzer
from tonekit.core.hct import Hct
from tonekit.core.types import Command, Report

command = Command(name='dislike', help='Detect (and optionally fix) universally disliked colors.')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('colors', nargs='+', metavar='COLOR', help='Colors to check')
    parser.add_argument('--fix', action='store_true', help='Show the lightened replacement for disliked colors')


@command.run
def run(args, report: Report) -> None:
    colors = [Hct.from_int(argb_from_rgb(*parse_color_arg(text))) for text in args.colors]
    stats = DislikeAnalyzer.analyze_batch(colors)
    fixed = DislikeAnalyzer.fix_batch(colors) if args.fix else None

    results = []
    for i, text in enumerate(args.colors):
        entry = {'input': text, 'hex': colors[i].to_hex(), 'disliked': i in stats.disliked_indices}
        if fixed is not None:
            entry['fixed'] = fixed[i].to_hex() if fixed[i] is not colors[i] else text
        results.append(entry)

    report.source = ' '.join(args.colors)
    report.add(
        'dislike',
        {
            'results': results,
            'summary': {'total': stats.total, 'disliked': stats.disliked, 'percentage': stats.percentage},
        },
    )
