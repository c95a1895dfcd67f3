"""
Command-line front end for sitegrade.

Examples:
    sitegrade create-project --name "Pad A" --location "Austin, TX"
    sitegrade list-dems <project_id>
    sitegrade analyze cutfill <project_id> <dem_id> --design-elevation 842
    sitegrade render <project_id> <dem_id> -o outputs/pad_a.png
"""

from typing import List, Optional
import argparse
import json
import logging
import sys

from sitegrade import logging_config
from sitegrade.api.service import TerrainService
from sitegrade.config.settings import load_config
from sitegrade.storage.store import JsonFileStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sitegrade',
        description='Site grading terrain analysis: cut/fill, contours, slope',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--config', default=None,
                        help='YAML or JSON configuration file')
    parser.add_argument('--data-dir', default=None,
                        help='Record store directory (overrides config)')
    parser.add_argument('--log-level', default=None,
                        help='Logging level (overrides config)')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the JSON result')

    sub = parser.add_subparsers(dest='command', required=True)

    create = sub.add_parser('create-project', help='Create a project with a demo DEM')
    create.add_argument('--name', default='Untitled Project')
    create.add_argument('--description', default='')
    create.add_argument('--location', default='')
    create.add_argument('--no-demo', action='store_true',
                        help='Do not generate the synthetic demo DEM')

    sub.add_parser('list-projects', help='List projects')

    delete = sub.add_parser('delete-project', help='Delete a project and its DEMs')
    delete.add_argument('project_id')

    dems = sub.add_parser('list-dems', help='List DEMs of a project (stats only)')
    dems.add_argument('project_id')
    dems.add_argument('--with-grid', action='store_true',
                      help='Include the full elevation grid')

    analyze = sub.add_parser('analyze', help='Run an analysis on a stored DEM')
    analyze.add_argument('type', choices=['cutfill', 'contours', 'slope'])
    analyze.add_argument('project_id')
    analyze.add_argument('dem_id')
    analyze.add_argument('--design-elevation', type=float, default=None,
                         help='Design pad elevation in feet (cutfill)')
    analyze.add_argument('--contour-interval', type=float, default=None,
                         help='Contour interval in feet (contours)')
    analyze.add_argument('--summary', action='store_true',
                         help='Omit per-cell grids and point lists')

    render = sub.add_parser('render', help='Save a four-panel analysis figure')
    render.add_argument('project_id')
    render.add_argument('dem_id')
    render.add_argument('-o', '--output', default='outputs/analysis.png')
    render.add_argument('--design-elevation', type=float, default=None)
    render.add_argument('--contour-interval', type=float, default=None)

    return parser


def _summarize(body):
    """Drop bulky per-cell payloads from an analysis response."""
    if not isinstance(body, dict):
        return body
    summary = {k: v for k, v in body.items() if k not in ('heatmap', 'gradient', 'aspect')}
    if 'contours' in summary:
        summary['contours'] = [
            {'elevation': c['elevation'], 'num_points': len(c['points'])}
            for c in summary['contours']
        ]
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns a process exit code."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.data_dir:
        config.storage.data_dir = args.data_dir
    logging_config.configure(args.log_level or config.log_level)

    service = TerrainService(JsonFileStore(config.storage.data_dir), config)
    verbose = not args.quiet

    if args.command == 'render':
        return _render(service, args, verbose)

    if args.command == 'create-project':
        status, body = service.handle('create_project', {
            'name': args.name,
            'description': args.description,
            'location': args.location,
            'generate_demo': not args.no_demo,
        })
    elif args.command == 'list-projects':
        status, body = service.handle('list_projects')
    elif args.command == 'delete-project':
        status, body = service.handle('delete_project', {'id': args.project_id})
    elif args.command == 'list-dems':
        status, body = service.handle('list_dems', {'project_id': args.project_id})
        if status == 200 and not args.with_grid:
            for dem in body:
                dem.pop('elevation_data', None)
    else:
        status, body = service.handle('analyze', {
            'project_id': args.project_id,
            'dem_id': args.dem_id,
            'type': args.type,
            'design_elevation': args.design_elevation,
            'contour_interval': args.contour_interval,
        })
        if status == 200 and args.summary:
            body = _summarize(body)

    if verbose:
        print(f"sitegrade {args.command}: status {status}", file=sys.stderr)
    print(json.dumps(body, indent=2))
    return 0 if status < 400 else 1


def _render(service: TerrainService, args: argparse.Namespace, verbose: bool) -> int:
    from sitegrade.core.errors import TerrainError
    from sitegrade.visualization.plotting import save_analysis_figure

    defaults = service.config.analysis
    design = args.design_elevation if args.design_elevation is not None else defaults.design_elevation_ft
    interval = args.contour_interval if args.contour_interval is not None else defaults.contour_interval_ft

    try:
        dem = service.store.get_dem(args.project_id, args.dem_id)

        if verbose:
            print(f"Rendering DEM {dem.name} ({dem.width}x{dem.height})", file=sys.stderr)
            print(f"  Design elevation: {design:g} ft", file=sys.stderr)
            print(f"  Contour interval: {interval:g} ft", file=sys.stderr)

        path = save_analysis_figure(
            dem.elevation_data, args.output,
            design_elevation_ft=design,
            contour_interval_ft=interval,
            cell_size_ft=defaults.cell_size_ft,
            bounds=dem.bounds,
        )
    except TerrainError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Saved analysis figure to %s", path)
    print(json.dumps({'output': str(path)}))
    return 0


if __name__ == '__main__':
    sys.exit(main())
