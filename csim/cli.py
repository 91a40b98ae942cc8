"""Command-line front end for the cache simulator.

Usage:
    csim [-v] -s <s> -E <E> -b <b> -t <trace>
"""
import logging
import sys

import click

from csim.core.cache import Cache
from csim.core.config import CacheConfig
from csim.core.errors import CacheSimError, ConfigurationError, SourceUnavailable
from csim.core.simulator import CacheSimulator
from csim.core.trace import read_trace
from csim.data.stats_export import Exporter, export_chart_pdf

logger = logging.getLogger('csim')

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def configure_logging(verbose: bool):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _echo_access(info: dict):
    click.echo(f"{info['op']} {info['address']:x},{info['size']} {info['result']}")


def run(s, E, b, trace_file, verbose=False, csv_path=None, json_path=None,
        chart_path=None, results_path=None) -> CacheSimulator:
    """Replay `trace_file` against a fresh cache and write any requested exports."""
    if not trace_file:
        raise ConfigurationError("missing required option -t")
    config = CacheConfig.from_options(s, E, b)
    logger.info(config.describe())
    logger.info("trace file name: %s", trace_file)

    # open the trace before any cache state exists
    records = read_trace(trace_file)
    sim = CacheSimulator(Cache(config), record_history=bool(json_path or chart_path))
    sim.replay(records, callback=_echo_access if verbose else None)

    if csv_path:
        Exporter.export_stats_csv(csv_path, sim.stats)
    if json_path:
        Exporter.export_stats_json(json_path, sim.stats, sim.hit_rate_history)
    if results_path:
        Exporter.write_results_file(results_path, sim.stats)
    if chart_path:
        export_chart_pdf(sim.hit_rate_history, chart_path)
    return sim


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('-v', '--verbose', is_flag=True, help='Verbose mode: report effects of each memory operation')
@click.option('-s', 's', type=int, help='Number of set index bits (there are 2**s sets)')
@click.option('-E', 'E', type=int, help='Number of lines per set (associativity)')
@click.option('-b', 'b', type=int, help='Number of block bits (there are 2**b bytes per block)')
@click.option('-t', 'trace_file', type=str, help='File name of the memory trace to process ("-" for stdin)')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False, writable=True), help='Write statistics as CSV')
@click.option('--json', 'json_path', type=click.Path(dir_okay=False, writable=True),
              help='Write statistics and hit-rate history as JSON')
@click.option('--chart', 'chart_path', type=click.Path(dir_okay=False, writable=True),
              help='Render the hit-rate history to a PDF')
@click.option('--results-file', 'results_path', type=click.Path(dir_okay=False, writable=True),
              help='Write the five counters on one line')
@click.pass_context
def main(ctx, verbose, s, E, b, trace_file, csv_path, json_path, chart_path, results_path):
    """Replay a memory trace against an LRU set-associative cache.

    The -s, -b, -E, and -t options must be supplied for all simulations.
    """
    configure_logging(verbose)
    try:
        sim = run(s, E, b, trace_file, verbose=verbose, csv_path=csv_path,
                  json_path=json_path, chart_path=chart_path, results_path=results_path)
    except (ConfigurationError, SourceUnavailable) as exc:
        logger.error("invalid argument: %s", exc)
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(exc.exit_code)
    except CacheSimError as exc:
        logger.error("%s", exc)
        ctx.exit(exc.exit_code)
    except OSError as exc:
        # export destinations
        logger.error("cannot write output: %s", exc)
        ctx.exit(1)
    click.echo(sim.stats.summary())


if __name__ == '__main__':
    main()
