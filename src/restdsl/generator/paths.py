"""Drive the :class:`~restdsl.generator.visitor.OperationVisitor` over a document.

:class:`RestDslGenerator` is the entry point for generating a whole REST DSL
block from a loaded OpenAPI document::

    generator = (
        RestDslGenerator(load_spec("petstore.json"))
        .with_filter("listPets,get*")
        .with_rest_configuration(RestConfiguration(component="servlet"))
    )
    emitter = SourceEmitter()
    report = generator.generate(emitter)

It emits an optional ``restConfiguration`` block and the opening ``rest``
statement, then hands each path item to a :class:`PathVisitor`, which builds
the operation models and visits them method by method.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlparse

from restdsl.emitter.base import CodeEmitter, is_empty
from restdsl.emitter.recording import RecordingEmitter
from restdsl.exceptions import RestDslError
from restdsl.generator.destinations import DestinationGenerator, DirectToOperationId
from restdsl.generator.filters import OperationFilter
from restdsl.generator.visitor import OperationVisitor
from restdsl.models import GeneratorConfig, HttpMethod, Operation, RestConfiguration
from restdsl.parser.loader import detect_version
from restdsl.parser.operations import iter_path_operations

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Outcome of one :meth:`RestDslGenerator.generate` run.

    Operations are identified by their id, or ``"METHOD /path"`` when they
    have none.

    Attributes:
        emitted: Operations whose events were emitted.
        filtered: Operations the filter rejected.
        failed: ``(operation, message)`` pairs skipped under
            ``continue_on_error``.
    """

    emitted: list[str] = field(default_factory=list)
    filtered: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


def operation_label(method: HttpMethod, operation: Operation) -> str:
    return operation.operation_id or f"{method.value.upper()} {operation.path}"


class PathVisitor:
    """Visit every operation of one path item.

    With ``continue_on_error`` each operation is first visited into a
    :class:`~restdsl.emitter.recording.RecordingEmitter` and its events are
    replayed into the real sink only once the visit has completed, so a
    failing operation is skipped whole instead of leaving a half-written
    verb in the sink. Without it, the first error propagates.
    """

    def __init__(
        self,
        version: int,
        visitor: OperationVisitor[Any],
        report: GenerationReport,
        continue_on_error: bool = False,
    ) -> None:
        self.version = version
        self.visitor = visitor
        self.report = report
        self.continue_on_error = continue_on_error

    def visit(self, path: str, path_item: dict[str, Any]) -> None:
        for method, operation in iter_path_operations(path, path_item, self.version):
            label = operation_label(method, operation)
            if not self.continue_on_error:
                emitted = self.visitor.visit(method, operation)
            else:
                try:
                    emitted = self._visit_staged(method, operation)
                except RestDslError as exc:
                    logger.error("Skipping %s: %s", label, exc)
                    self.report.failed.append((label, str(exc)))
                    continue

            if emitted:
                self.report.emitted.append(label)
            else:
                self.report.filtered.append(label)

    def _visit_staged(self, method: HttpMethod, operation: Operation) -> bool:
        staging = RecordingEmitter()
        emitted = OperationVisitor(
            staging, self.visitor.filter, self.visitor.destination_generator
        ).visit(method, operation)
        for event, value in staging.events:
            self.visitor.emitter.emit(event, value)
        return emitted


class RestDslGenerator:
    """Generate the REST DSL events for every operation of a document.

    Configuration methods return the generator so they can be chained.

    Args:
        document: A loaded OpenAPI document.
        version: ``2`` or ``3``; detected from the document when omitted.

    Raises:
        SpecParseError: If *version* is omitted and cannot be detected.
    """

    def __init__(self, document: dict[str, Any], version: Optional[int] = None) -> None:
        self.document = document
        self.version = version if version is not None else detect_version(document)
        self.filter = OperationFilter()
        self.destination_generator: DestinationGenerator = DirectToOperationId()
        self.rest_configuration: Optional[RestConfiguration] = None
        self.continue_on_error = False

    @classmethod
    def from_config(cls, document: dict[str, Any], config: GeneratorConfig) -> RestDslGenerator:
        """Create a generator configured from a resolved :class:`~restdsl.models.GeneratorConfig`."""
        return (
            cls(document)
            .with_filter(config.filter)
            .with_destination_generator(DirectToOperationId(config.destination))
            .with_rest_configuration(config.rest)
            .with_continue_on_error(config.continue_on_error)
        )

    def with_filter(self, operation_filter: OperationFilter | str | None) -> RestDslGenerator:
        if not isinstance(operation_filter, OperationFilter):
            operation_filter = OperationFilter(operation_filter)
        self.filter = operation_filter
        return self

    def with_destination_generator(self, generator: DestinationGenerator) -> RestDslGenerator:
        self.destination_generator = generator
        return self

    def with_rest_configuration(self, configuration: Optional[RestConfiguration]) -> RestDslGenerator:
        self.rest_configuration = configuration
        return self

    def with_continue_on_error(self, enabled: bool = True) -> RestDslGenerator:
        self.continue_on_error = enabled
        return self

    def base_path(self) -> Optional[str]:
        """Return the path the ``rest`` block is mounted at, if declared.

        Swagger 2 declares it as ``basePath``. For OpenAPI 3 it is the path
        component of the first server URL (``https://api.example.com/v1``
        gives ``/v1``). A bare ``/`` counts as no base path.
        """
        if self.version == 2:
            raw = self.document.get("basePath")
        else:
            servers = self.document.get("servers")
            servers = servers if isinstance(servers, list) else []
            first = servers[0] if servers and isinstance(servers[0], dict) else {}
            url = first.get("url")
            raw = urlparse(str(url)).path if url else None
        if not raw:
            return None
        path = str(raw).rstrip("/")
        return path or None

    def generate(self, emitter: CodeEmitter) -> GenerationReport:
        """Emit the whole REST DSL block into *emitter*.

        Returns:
            A :class:`GenerationReport` listing emitted, filtered, and
            failed operations.

        Raises:
            RestDslError: From the first failing operation, unless
                ``continue_on_error`` is enabled.
        """
        self._emit_rest_configuration(emitter)

        base_path = self.base_path()
        if base_path:
            emitter.emit("rest", base_path)
        else:
            emitter.emit("rest")

        report = GenerationReport()
        visitor = OperationVisitor(emitter, self.filter, self.destination_generator)
        path_visitor = PathVisitor(self.version, visitor, report, self.continue_on_error)

        paths = self.document.get("paths")
        for path, path_item in (paths.items() if isinstance(paths, dict) else ()):
            if not isinstance(path_item, dict):
                continue
            path_visitor.visit(str(path), path_item)

        logger.debug(
            "Generated %d operation(s), filtered %d, failed %d",
            len(report.emitted),
            len(report.filtered),
            len(report.failed),
        )
        return report

    def _emit_rest_configuration(self, emitter: CodeEmitter) -> None:
        configuration = self.rest_configuration
        if configuration is None or configuration.is_blank():
            return
        emitter.emit("restConfiguration")
        for event, value in (
            ("component", configuration.component),
            ("contextPath", configuration.context_path),
            ("apiContextPath", configuration.api_context_path),
            ("host", configuration.host),
        ):
            if not is_empty(value):
                emitter.emit(event, value)
