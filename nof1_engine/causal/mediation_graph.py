"""
Fixed mediation DAG.

The causal structure is set by design, not learned: every analysed
nutrient points at every analysed outcome directly and at the single
mediator, and the mediator points at every outcome.

When the mediator is itself one of the analysed outcomes, the estimator
still routes nutrient -> mediator -> mediator (a self-referential indirect
term). The graph does not draw that self-loop; instead the mediator node
is flagged `self_mediated=True` so the ambiguity stays visible.
"""
from typing import Dict, List, Optional, Sequence

import networkx as nx

from nof1_engine.config import MEDIATOR_KEY
from nof1_engine.data_prep.variable_catalog import (
    ANALYZED_NUTRIENTS,
    ANALYZED_OUTCOMES,
    validate_variable_keys,
)


def build_mediation_dag(
    nutrient_keys: Optional[Sequence[str]] = None,
    outcome_keys: Optional[Sequence[str]] = None,
    mediator_key: str = MEDIATOR_KEY,
) -> nx.DiGraph:
    """
    Build the nutrient / mediator / outcome graph.

    Node attribute `role`: 'nutrient' | 'mediator' | 'outcome'
    Edge attribute `path`: 'direct' | 'to_mediator' | 'from_mediator'
    """
    nutrient_keys = list(nutrient_keys) if nutrient_keys is not None else list(ANALYZED_NUTRIENTS)
    outcome_keys = list(outcome_keys) if outcome_keys is not None else list(ANALYZED_OUTCOMES)
    validate_variable_keys(nutrient_keys, list(outcome_keys) + [mediator_key])

    G = nx.DiGraph()
    G.add_node(mediator_key, role="mediator",
               self_mediated=mediator_key in outcome_keys)

    for n in nutrient_keys:
        G.add_node(n, role="nutrient")
        G.add_edge(n, mediator_key, path="to_mediator")

    for o in outcome_keys:
        if o != mediator_key:
            G.add_node(o, role="outcome")
            G.add_edge(mediator_key, o, path="from_mediator")
        for n in nutrient_keys:
            if o == mediator_key:
                # direct edge coincides with the to_mediator edge
                G.edges[n, o]["also_direct"] = True
            else:
                G.add_edge(n, o, path="direct")

    return G


def mediation_paths(dag: nx.DiGraph, nutrient: str, outcome: str) -> List[List[str]]:
    """All simple causal paths from a nutrient to an outcome."""
    if nutrient not in dag or outcome not in dag:
        return []
    return [list(p) for p in nx.all_simple_paths(dag, nutrient, outcome)]


def get_mediator(dag: nx.DiGraph) -> Optional[str]:
    for node, data in dag.nodes(data=True):
        if data.get("role") == "mediator":
            return node
    return None


def summarize_dag(dag: nx.DiGraph) -> Dict:
    """Counts and flags describing the mediation graph."""
    mediator = get_mediator(dag)
    by_role = {}
    for node, data in dag.nodes(data=True):
        by_role.setdefault(data.get("role", "?"), []).append(node)

    return {
        "nodes": dag.number_of_nodes(),
        "edges": dag.number_of_edges(),
        "is_dag": nx.is_directed_acyclic_graph(dag),
        "mediator": mediator,
        "self_mediated": bool(dag.nodes[mediator].get("self_mediated")) if mediator else False,
        "nutrients": len(by_role.get("nutrient", [])),
        "outcomes": len(by_role.get("outcome", [])) + (
            1 if mediator and dag.nodes[mediator].get("self_mediated") else 0
        ),
    }


def print_dag_summary(dag: nx.DiGraph) -> None:
    summary = summarize_dag(dag)
    print(f"\nMediation DAG Summary")
    print(f"  Nodes: {summary['nodes']}")
    print(f"  Edges: {summary['edges']}")
    print(f"  Mediator: {summary['mediator']}")
    print(f"  Nutrients: {summary['nutrients']}, Outcomes: {summary['outcomes']}")
    if summary["self_mediated"]:
        print(f"  ⚠️ {summary['mediator']} is also an analysed outcome "
              f"(indirect term is self-referential for that outcome)")


def generate_mermaid_dag(dag: nx.DiGraph) -> str:
    """Generate a Mermaid diagram of the mediation graph."""
    role_styles = {
        "nutrient": "fill:#4CAF50,color:white",
        "mediator": "fill:#FF9800,color:white",
        "outcome": "fill:#9C27B0,color:white",
    }
    lines = ["graph LR"]

    for role in ["nutrient", "mediator", "outcome"]:
        for node in [n for n, d in dag.nodes(data=True) if d.get("role") == role]:
            lines.append(f"    {_mermaid_id(node)}[\"{node}\"]")

    for src, tgt, data in dag.edges(data=True):
        if data.get("path") == "direct":
            lines.append(f"    {_mermaid_id(src)} --> {_mermaid_id(tgt)}")
        else:
            lines.append(f"    {_mermaid_id(src)} -.->|mediated| {_mermaid_id(tgt)}")

    for role, style in role_styles.items():
        nodes = [n for n, d in dag.nodes(data=True) if d.get("role") == role]
        if nodes:
            lines.append(f"    style {','.join(_mermaid_id(n) for n in nodes)} {style}")

    return "\n".join(lines)


def _mermaid_id(name: str) -> str:
    """Convert node name to valid Mermaid ID."""
    return name.replace(" ", "_").replace("-", "_").replace(".", "_")
