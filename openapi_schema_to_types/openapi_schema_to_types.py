import json
import logging

import click

from .cli_utils import generation_comment
from .document_loader import load_schema_graph
from .pipeline import GenerationRun, GeneratorConfig, SchemaConversionError, TypeScriptPrinter, collect_operations

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--no-operations", is_flag=True, default=False, help="Do not print types for the operations under paths")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug information")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def openapi_schema_to_types(config, no_operations, verbose, path, output):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flag overrides config file
    if no_operations:
        config.printer.emit_operations = False

    try:
        graph = load_schema_graph(path, config.converter)
        run = GenerationRun(graph, config.converter)
        run.register_components()
        operations = collect_operations(run) if config.printer.emit_operations else []
        declarations = run.generate_named_declarations()
    except SchemaConversionError as e:
        raise click.ClickException(str(e)) from e

    printer = TypeScriptPrinter(config.printer)
    out = printer.print_declarations(declarations, operations, generation_comment(openapi_schema_to_types))
    with open(output, "w") as f:
        f.write(out)

    logger.info("Wrote %d declarations and %d operations to %s", len(declarations), len(operations), output)
