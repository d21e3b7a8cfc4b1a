from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langgraph.graph import END, START, StateGraph

from tripmind.core.enrichment import TripEnricher
from tripmind.core.nodes import make_enrich_node, make_generate_node, make_parse_node
from tripmind.core.schemas import State


def build_trip_graph(
    *,
    llm: BaseChatModel,
    enricher: TripEnricher,
    currency_symbol: str = "£",
) -> Any:
    """Wire generate -> parse -> enrich into a compiled LangGraph state machine.

    Generation and refinement share this graph; the generate node picks the
    prompt from the initial state.
    """

    graph_builder = StateGraph(state_schema=State)

    graph_builder.add_node("generate", make_generate_node(llm, currency_symbol=currency_symbol))
    graph_builder.add_node("parse", make_parse_node())
    graph_builder.add_node("enrich", make_enrich_node(enricher))

    graph_builder.add_edge(START, "generate")
    graph_builder.add_edge("generate", "parse")
    graph_builder.add_edge("parse", "enrich")
    graph_builder.add_edge("enrich", END)

    return graph_builder.compile()
