"""
Management command to render a markdown file the way the preview pane shows it.

Writes the postprocessed HTML (or, with --raw, the HTML-text view) to stdout or
to a file. Useful for checking stylesheet changes and converter settings
without a browser.
"""

import argparse
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from preview.conf import get_preview_settings
from preview.markdown.renderer import render_preview
from preview.stylesheets import render_preview_document


class Command(BaseCommand):
    help = 'Render a markdown file to preview HTML'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            type=str,
            help='Markdown file to render',
        )
        parser.add_argument(
            '--output',
            type=str,
            help='Write the HTML to this file instead of stdout',
        )
        parser.add_argument(
            '--raw',
            action='store_true',
            help='Output the HTML-text view instead of the preview body',
        )
        parser.add_argument(
            '--document',
            action='store_true',
            help='Wrap the preview in a standalone page with the preview stylesheet',
        )
        parser.add_argument(
            '--task-lists',
            action=argparse.BooleanOptionalAction,
            default=None,
            help='Override the task_lists setting',
        )
        parser.add_argument(
            '--icon-bullets',
            action=argparse.BooleanOptionalAction,
            default=None,
            help='Override the icon_bullets setting',
        )

    def handle(self, *args, **options):
        path = Path(options['path'])
        output = options.get('output')

        if options.get('raw') and options.get('document'):
            raise CommandError('--raw and --document cannot be combined')

        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            raise CommandError(f'Could not read {path}: {e}')

        preview_settings = get_preview_settings().with_features(
            task_lists=options.get('task_lists'),
            icon_bullets=options.get('icon_bullets'),
        )

        result = render_preview(text, preview_settings)
        if not result.ok:
            raise CommandError(f'Failed to render {path}: {result.error}')

        if options.get('raw'):
            html = result.raw_html
        elif options.get('document'):
            html = render_preview_document(result, preview_settings, title=path.name)
        else:
            html = result.html

        if output:
            Path(output).write_text(html, encoding='utf-8')
            self.stdout.write(self.style.SUCCESS(f'Wrote {len(html)} characters to {output}'))
        else:
            self.stdout.write(html, ending='')
