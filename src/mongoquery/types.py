"""Type aliases for the mongoquery package.

These describe the input grammar (field queries, query expressions, eval
expressions) and the backend output shapes (filters, pipeline stages).
"""

from typing import Any, Callable, Dict, List, Mapping, Sequence

# Input grammar
FieldQuery = Any
QueryExpr = Mapping[str, Any]
EvalExpr = Any

# Backend output
Filter = Dict[str, Any]
PipelineStage = Dict[str, Any]
Pipeline = List[PipelineStage]

# Receives the stages emitted for one aggregate node
AggregateSink = Callable[[Sequence[PipelineStage]], None]
