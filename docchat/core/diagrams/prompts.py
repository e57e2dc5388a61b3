"""
Diagram markup prompts.

System prompts for the two markup languages, tailored per category, and
the user prompt that carries a DiagramSpec to the model.

Dependencies: docchat.models.diagram
System role: Prompt templates for markup generation
"""

from docchat.models.diagram import DiagramCategory, DiagramSpec

D2_RULES = """Important rules:
1. Use D2 language syntax, not mermaid or any other format.
2. The first line must be 'direction: {direction}'.
3. Keep node definitions simple: key: "Label".
4. DO NOT use complex style attributes or padding; our D2 version rejects them.
5. Connect components with the -> operator and short labels where useful.
6. DO NOT include a title block.
7. Keep the diagram focused: 8 to 15 elements.
8. Return only valid D2 code without comments or explanations."""

D2_CATEGORY_PROMPTS: dict[DiagramCategory, str] = {
    DiagramCategory.NETWORK: (
        "You are an expert at creating network diagrams using the D2 language. "
        "Show network zones, security boundaries and traffic paths between them."
    ),
    DiagramCategory.PROCESS: (
        "You are an expert at creating process and workflow diagrams using the D2 language. "
        "Show ordered steps, decisions and hand-offs as a readable flow."
    ),
    DiagramCategory.SOFTWARE: (
        "You are an expert at creating software architecture diagrams using the D2 language. "
        "Show application layers, services, data stores and their dependencies."
    ),
    DiagramCategory.MIGRATION: (
        "You are an expert at creating cloud migration diagrams using the D2 language. "
        "Show the source environment, the migration platform and the target cloud, "
        "with the discovery, replication and cutover stages between them."
    ),
    DiagramCategory.CLOUD: (
        "You are an expert at creating cloud architecture diagrams using the D2 language. "
        "Show accounts, regions, managed services and how workloads use them."
    ),
    DiagramCategory.GENERIC: (
        "You are an expert at creating clear explanatory diagrams using the D2 language. "
        "Show the main concepts and how they relate."
    ),
}

D2_DIRECTIONS: dict[str, str] = {
    "vertical": "down",
    "hierarchical": "down",
    "layered": "down",
    "nested-groups": "down",
    "funnel": "down",
}

D2_EXAMPLE = """Example:
direction: right

source: "Source Environment"
discovery: "Discovery"
platform: "{product} Platform"
target: "Target Cloud"

source -> discovery: inventory
discovery -> platform
platform -> target: replicate"""

MERMAID_RULES = """Important rules:
1. Use Mermaid flowchart syntax only, starting with 'flowchart {direction}'.
2. Give every node an id and a bracketed label, e.g. A[Source VM].
3. Connect nodes with --> and optional |labels|.
4. Use 6 to 12 nodes.
5. Return only the Mermaid code without explanations."""

MERMAID_CATEGORY_PROMPTS: dict[DiagramCategory, str] = {
    DiagramCategory.NETWORK: "You draw simple Mermaid network diagrams.",
    DiagramCategory.PROCESS: "You draw simple Mermaid process flowcharts.",
    DiagramCategory.SOFTWARE: "You draw simple Mermaid software component diagrams.",
    DiagramCategory.MIGRATION: "You draw simple Mermaid cloud migration flowcharts.",
    DiagramCategory.CLOUD: "You draw simple Mermaid cloud architecture diagrams.",
    DiagramCategory.GENERIC: "You draw simple Mermaid concept diagrams.",
}

MERMAID_DIRECTIONS: dict[str, str] = {
    "vertical": "TD",
    "hierarchical": "TD",
    "layered": "TD",
    "nested-groups": "TD",
    "funnel": "TD",
}

SPEC_USER_PROMPT = """User request: "{prompt}"

Diagram type: {specific_type}
Layout: {layout}
Include these elements (you may add a few closely related ones): {elements}
Request id: {unique_id}

Make this diagram different from any earlier diagram for a similar request."""


def _d2_direction(layout: str) -> str:
    return D2_DIRECTIONS.get(layout, "right")


def _mermaid_direction(layout: str) -> str:
    return MERMAID_DIRECTIONS.get(layout, "LR")


def structured_system_prompt(spec: DiagramSpec, product_name: str = "RiverMeadow") -> str:
    """D2 system prompt for the DiagramSpec category."""
    return "\n\n".join(
        [
            D2_CATEGORY_PROMPTS[spec.category],
            D2_RULES.format(direction=_d2_direction(spec.layout)),
            D2_EXAMPLE.format(product=product_name),
        ]
    )


def simple_system_prompt(spec: DiagramSpec) -> str:
    """Mermaid system prompt for the DiagramSpec category."""
    return "\n\n".join(
        [
            MERMAID_CATEGORY_PROMPTS[spec.category],
            MERMAID_RULES.format(direction=_mermaid_direction(spec.layout)),
        ]
    )


def spec_user_prompt(spec: DiagramSpec, prompt: str) -> str:
    """User prompt carrying the DiagramSpec to either markup language."""
    return SPEC_USER_PROMPT.format(
        prompt=prompt.strip(),
        specific_type=spec.specific_type,
        layout=spec.layout,
        elements=", ".join(spec.elements),
        unique_id=spec.unique_id,
    )
