"""
Core drift analysis orchestration logic.

DriftEngine runs the middleware pipeline and the analyser over two resource
sets that were already collected. detect_drift wires the whole run together:
schema metadata, .driftignore rules, Terraform state, remote enumeration and
finally the engine.
"""

from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence

from ..utils import setup_logging
from .alerter import Alerter
from .analyser import Analyzer
from .analysis import Alert, Analysis
from .filter import DriftIgnore
from .middlewares import Chain, Middleware, default_middlewares
from .output.printer import Printer, VoidPrinter
from .output.progress import Progress
from .remote import Enumerator, RemoteScanner, aws_enumerators
from .resource import Resource, SchemaRepository
from .resources import build_schema_repository
from .state import read_state

if TYPE_CHECKING:
    from ..config import Config

logger = setup_logging()


class DriftEngine:
    """Pure transform from (remote, state, rules) to one Analysis."""

    def __init__(
        self,
        schema_repository: SchemaRepository,
        driftignore: Optional[DriftIgnore] = None,
        middlewares: Sequence[Middleware] = (),
    ) -> None:
        self.chain = Chain(middlewares)
        self.analyzer = Analyzer(schema_repository, driftignore)

    def run(
        self,
        remote_resources: List[Resource],
        state_resources: List[Resource],
        alerts: Optional[Mapping[str, Sequence[Alert]]] = None,
    ) -> Analysis:
        """
        Reconciles and compares the two resource sets.

        Both lists are modified in place by the middlewares.

        Raises:
            MiddlewareError: If a middleware fails; no comparison is done
        """
        logger.info(
            f"Analysing {len(remote_resources)} remote resources against "
            f"{len(state_resources)} state resources"
        )
        self.chain.execute(remote_resources, state_resources)
        return self.analyzer.analyze(remote_resources, state_resources, alerts)


def detect_drift(
    config: "Config",
    enumerators: Optional[Sequence[Enumerator]] = None,
    printer: Optional[Printer] = None,
) -> Analysis:
    """
    Main entry point for drift detection. Orchestrates the entire run.

    This function:
    - Registers resource metadata and reads the .driftignore rules
    - Reads resources from the Terraform state (S3 or local file)
    - Enumerates live resources, recording permission failures as alerts
    - Reconciles and compares both sets

    Args:
        config: Validated configuration
        enumerators: Remote enumerators; defaults to the AWS ones for the region
        printer: Printer for progress messages; silent when omitted

    Returns:
        The analysis of the run
    """
    schema_repository = build_schema_repository()
    driftignore = DriftIgnore.from_file(config.driftignore_path)

    state_resources = read_state(config.state_path, region_name=config.aws_region)

    if enumerators is None:
        enumerators = aws_enumerators(
            region_name=config.aws_region,
            max_retries=config.max_retries,
            timeout_seconds=config.timeout_seconds,
        )
    alerter = Alerter()
    progress = Progress(printer if printer is not None else VoidPrinter())
    scanner = RemoteScanner(enumerators, alerter, config.max_workers, progress)
    progress.start()
    try:
        remote_resources = scanner.scan()
    finally:
        progress.stop()

    if len(alerter):
        logger.warning(f"{len(alerter)} alert(s) raised while listing remote resources")

    attribute_scopes = {
        enumerator.resource_type: enumerator.attributes
        for enumerator in enumerators
        if enumerator.attributes is not None
    }
    engine = DriftEngine(
        schema_repository,
        driftignore,
        default_middlewares(attribute_scopes),
    )
    return engine.run(remote_resources, state_resources, alerter.alerts())
