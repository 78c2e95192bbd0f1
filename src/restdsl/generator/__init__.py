"""REST DSL generator -- turn operation models into emitted DSL events.

Typical usage::

    from restdsl.emitter import SourceEmitter
    from restdsl.generator import RestDslGenerator
    from restdsl.parser import load_spec

    emitter = SourceEmitter()
    RestDslGenerator(load_spec("petstore.yaml")).with_filter("get*").generate(emitter)
    print(emitter.render())

Sub-modules:

* :mod:`~restdsl.generator.parameters` -- Normalize Swagger 2 / OpenAPI 3
  parameters into one descriptor.
* :mod:`~restdsl.generator.visitor` -- Emit the events of one operation.
* :mod:`~restdsl.generator.paths` -- Walk a whole document.
* :mod:`~restdsl.generator.filters` -- Operation-id filter.
* :mod:`~restdsl.generator.destinations` -- ``to`` destination strategies.
"""

from restdsl.generator.destinations import DestinationGenerator, DirectToOperationId
from restdsl.generator.filters import OperationFilter
from restdsl.generator.parameters import extract_parameter
from restdsl.generator.paths import GenerationReport, PathVisitor, RestDslGenerator
from restdsl.generator.visitor import OperationVisitor

__all__ = [
    "DestinationGenerator",
    "DirectToOperationId",
    "GenerationReport",
    "OperationFilter",
    "OperationVisitor",
    "PathVisitor",
    "RestDslGenerator",
    "extract_parameter",
]
