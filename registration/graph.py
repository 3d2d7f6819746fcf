from typing import Any, Dict, Optional
from langgraph.graph import StateGraph, START, END

from registration.state import RegistrationState
from registration.validator import RegistrationValidator


class RegistrationGraphFactory:
    def __init__(self, validator: RegistrationValidator):
        self.validator = validator

    @staticmethod
    def collect_node(state: RegistrationState) -> Dict[str, Any]:
        """
        No-op: graph.invoke(patch, config) already merges the changed field
        into state, leaving every other field as it was.
        """
        return {}

    def build(self) -> StateGraph:
        g = StateGraph(RegistrationState)

        g.add_node("collect", self.collect_node)
        g.add_node("validate", self.validator.validate_fields)
        g.add_node("derive", self.validator.derive_errors)

        g.add_edge(START, "collect")
        g.add_edge("collect", "validate")
        g.add_edge("validate", "derive")
        g.add_edge("derive", END)

        return g

    def compile(self, checkpointer: Optional[Any] = None):
        return self.build().compile(checkpointer=checkpointer)
