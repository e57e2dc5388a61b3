"""
Topic vocabulary for citation and section matching.

Lower-case terms grouped by kind. The resolver extracts query topics from
the union; the structure mapper uses the technical terms to weight image
importance.

Dependencies: None
System role: Shared vocabulary for reference resolution
"""

import re

DIAGRAM_TYPES: tuple[str, ...] = (
    "architecture", "workflow", "flowchart", "process", "topology", "overview",
    "sequence", "lifecycle", "pipeline", "dashboard", "screenshot", "wizard",
)

CLOUD_PLATFORM_TERMS: tuple[str, ...] = (
    "google cloud", "gcp", "aws", "amazon", "azure", "vmware", "vsphere",
    "openstack", "hyper-v", "kubernetes", "vpc", "cloud", "on-premises",
)

TECHNICAL_OPERATIONS: tuple[str, ...] = (
    "migration", "replication", "cutover", "discovery", "deployment", "launch",
    "provisioning", "upgrade", "sync", "snapshot", "configuration", "install",
    "prerequisite", "validation", "network", "firewall", "credentials", "permissions",
)

DOMAIN_TERMS: tuple[str, ...] = (
    "appliance", "source", "target", "workload", "server", "operating system",
    "os", "driver", "agent", "console", "project", "instance", "disk",
)

TOPIC_VOCABULARY: tuple[str, ...] = (
    *DIAGRAM_TYPES, *CLOUD_PLATFORM_TERMS, *TECHNICAL_OPERATIONS, *DOMAIN_TERMS,
)

# Terms whose presence near a figure marks it as technically important.
IMPORTANCE_TERMS: tuple[str, ...] = (
    "migration", "architecture", "appliance", "replication", "cutover",
    "network", "prerequisite", "workflow", "os",
)


def contains_term(text: str, term: str) -> bool:
    """Whole-word, case-insensitive containment (multi-word terms allowed)."""
    return re.search(rf"(?<![a-z0-9]){re.escape(term.lower())}(?![a-z0-9])", text.lower()) is not None


def starts_word(text: str, stem: str) -> bool:
    """Case-insensitive match of ``stem`` at a word start; suffixes such as plurals allowed."""
    return re.search(rf"(?<![a-z0-9]){re.escape(stem.lower())}", (text or "").lower()) is not None


def extract_topics(text: str, vocabulary: tuple[str, ...] = TOPIC_VOCABULARY) -> list[str]:
    """Vocabulary terms present in ``text``, in vocabulary order."""
    return [term for term in vocabulary if contains_term(text or "", term)]
