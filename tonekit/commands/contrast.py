"""WCAG contrast ratio between a foreground and a background color.

Reports the ratio and whether it passes AA (4.5:1, large text 3:1) and
AAA (7:1, large text 4.5:1). Large text means 18pt, or 14pt bold.

Example:
    tonekit contrast '#767676' '#ffffff'
    tonekit contrast 'rgb(40, 40, 40)' '#f5f5f5' -j
"""

from tonekit.commands.convert import parse_color_arg
from tonekit.core.contrast import contrast_ratio, meets_contrast_aa, meets_contrast_aaa
from tonekit.core.types import Command, Report

command = Command(name='contrast', help='Check WCAG contrast between two colors.')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('foreground', help='Text color')
    parser.add_argument('background', help='Background color')


@command.run
def run(args, report: Report) -> None:
    fg = parse_color_arg(args.foreground)
    bg = parse_color_arg(args.background)
    report.source = f'{args.foreground} on {args.background}'
    report.add(
        'contrast',
        {
            'ratio': round(contrast_ratio(fg, bg), 2),
            'aa': meets_contrast_aa(fg, bg),
            'aa_large': meets_contrast_aa(fg, bg, large_text=True),
            'aaa': meets_contrast_aaa(fg, bg),
            'aaa_large': meets_contrast_aaa(fg, bg, large_text=True),
        },
    )
