"""Per-category diagram style catalog.

One table keyed by DiagramCategory holds everything the classifier and
synthesizer choose from: keywords, template names, palettes, element sets
and layouts. Every category must have an entry; ``get_catalog`` raises on a
missing key so a new enum member cannot be silently ignored.

Dependencies: dataclasses, docchat.models.diagram
System role: Static style data for diagram synthesis
"""

from dataclasses import dataclass

from docchat.models.diagram import ColorPalette, DiagramCategory


@dataclass(frozen=True)
class CategoryCatalog:
    """Selectable options for one diagram category."""

    keywords: tuple[str, ...]
    specific_types: tuple[str, ...]
    palettes: tuple[ColorPalette, ...]
    element_sets: tuple[tuple[str, ...], ...]
    layouts: tuple[str, ...]


def _palette(primary: str, secondary: str, accent: str) -> ColorPalette:
    return ColorPalette(primary=primary, secondary=secondary, accent=accent)


CATALOG: dict[DiagramCategory, CategoryCatalog] = {
    DiagramCategory.NETWORK: CategoryCatalog(
        keywords=(
            "network", "topology", "router", "switch", "firewall", "subnet",
            "vpc", "vpn", "lan", "wan", "dns", "load balancer", "gateway",
            "bandwidth", "connectivity", "infrastructure", "architecture",
        ),
        specific_types=(
            "Network Topology",
            "Hub and Spoke Network",
            "Segmented Security Zones",
            "Site-to-Site Connectivity",
            "Data Center Interconnect",
            "Perimeter Defense Map",
            "Replication Traffic Path",
        ),
        palettes=(
            _palette("#1F4E79", "#9DC3E6", "#F4B183"),
            _palette("#0B3C5D", "#328CC1", "#D9B310"),
            _palette("#2E4057", "#66A182", "#EDAE49"),
            _palette("#14213D", "#5C7AEA", "#FCA311"),
            _palette("#253237", "#5C6B73", "#9DB4C0"),
            _palette("#003049", "#669BBC", "#C1121F"),
            _palette("#22333B", "#5E503F", "#C6AC8F"),
        ),
        element_sets=(
            ("Edge Router", "Core Switch", "Firewall", "Application Subnet", "Database Subnet"),
            ("On-Premises Data Center", "VPN Gateway", "Cloud VPC", "Transit Gateway", "Workload Subnets"),
            ("Internet", "Load Balancer", "Web Tier", "App Tier", "Data Tier"),
            ("Source Site", "Replication Appliance", "WAN Link", "Target Landing Zone"),
            ("DNS Resolver", "Security Groups", "Private Endpoints", "NAT Gateway", "Bastion Host"),
            ("Branch Office", "SD-WAN Controller", "Regional Hub", "Cloud Interconnect"),
        ),
        layouts=("horizontal", "hierarchical", "radial", "layered", "mesh"),
    ),
    DiagramCategory.PROCESS: CategoryCatalog(
        keywords=(
            "process", "workflow", "flow", "steps", "step", "procedure",
            "pipeline", "lifecycle", "sequence", "stages", "phase", "phases",
            "approval", "onboarding",
        ),
        specific_types=(
            "Linear Workflow",
            "Swim Lane Process",
            "Decision Flowchart",
            "Approval Pipeline",
            "Lifecycle Loop",
            "Phased Rollout",
            "Stage Gate Process",
            "Checklist Flow",
        ),
        palettes=(
            _palette("#2D6A4F", "#95D5B2", "#F4A261"),
            _palette("#3D405B", "#81B29A", "#E07A5F"),
            _palette("#264653", "#2A9D8F", "#E9C46A"),
            _palette("#5F0F40", "#9A031E", "#FB8B24"),
            _palette("#1B263B", "#778DA9", "#E0E1DD"),
            _palette("#344E41", "#A3B18A", "#DAD7CD"),
            _palette("#6D597A", "#B56576", "#EAAC8B"),
        ),
        element_sets=(
            ("Request", "Review", "Approve", "Execute", "Verify"),
            ("Discover", "Assess", "Plan", "Migrate", "Validate", "Optimize"),
            ("Intake", "Triage", "Assign", "Resolve", "Close"),
            ("Prepare", "Schedule", "Run Job", "Monitor", "Report"),
            ("Collect Inputs", "Decision Point", "Happy Path", "Exception Path", "Complete"),
            ("Kickoff", "Pilot Wave", "Production Waves", "Cutover", "Hypercare"),
        ),
        layouts=("horizontal", "vertical", "swim-lanes", "circular", "zigzag"),
    ),
    DiagramCategory.SOFTWARE: CategoryCatalog(
        keywords=(
            "software", "application", "component", "service",
            "microservice", "api", "database", "frontend", "backend", "module",
            "system", "structure", "class", "deployment",
        ),
        specific_types=(
            "Layered Architecture",
            "Microservices Map",
            "Component Diagram",
            "Deployment View",
            "Event-Driven Architecture",
            "Client-Server Model",
            "Data Flow Architecture",
            "Plugin Architecture",
            "Hexagonal Architecture",
        ),
        palettes=(
            _palette("#3A0CA3", "#4361EE", "#F72585"),
            _palette("#1D3557", "#457B9D", "#E63946"),
            _palette("#283618", "#606C38", "#DDA15E"),
            _palette("#011627", "#2EC4B6", "#FF9F1C"),
            _palette("#2B2D42", "#8D99AE", "#EF233C"),
            _palette("#0D1B2A", "#415A77", "#F77F00"),
            _palette("#432818", "#99582A", "#FFE6A7"),
            _palette("#1A1A2E", "#16213E", "#E94560"),
        ),
        element_sets=(
            ("User Interface", "API Layer", "Business Logic", "Data Services", "Database"),
            ("Web Dashboard", "API Gateway", "Migration Engine", "Cloud Connectors", "Audit Log"),
            ("Client", "Auth Service", "Orchestrator", "Worker Pool", "Message Queue"),
            ("Frontend", "Backend", "Cache", "Object Storage", "Monitoring"),
            ("Event Producer", "Event Bus", "Consumers", "State Store"),
            ("Core Domain", "Inbound Adapters", "Outbound Adapters", "Ports"),
        ),
        layouts=("hierarchical", "layered", "horizontal", "grid", "radial", "vertical"),
    ),
    DiagramCategory.MIGRATION: CategoryCatalog(
        keywords=(
            "migration", "migrate", "migrating", "cutover", "replication",
            "lift and shift", "rehost", "re-platform", "source", "target",
            "transfer", "move", "os migration", "p2v", "v2v",
        ),
        specific_types=(
            "Migration Architecture",
            "Source to Target Flow",
            "Wave Planning Map",
            "OS Modernization Path",
            "Cutover Runbook",
            "Replication Pipeline",
            "Multi-Cloud Migration",
            "Lift and Shift Blueprint",
            "Pre-Flight Check Flow",
            "Rollback Strategy",
        ),
        palettes=(
            _palette("#0F4C5C", "#5F0F40", "#FB8B24"),
            _palette("#005F73", "#0A9396", "#EE9B00"),
            _palette("#1B4332", "#40916C", "#FFB703"),
            _palette("#023047", "#219EBC", "#FB8500"),
            _palette("#370617", "#6A040F", "#F48C06"),
            _palette("#22223B", "#4A4E69", "#C9ADA7"),
            _palette("#2F3E46", "#52796F", "#CAD2C5"),
            _palette("#10002B", "#5A189A", "#E0AAFF"),
        ),
        element_sets=(
            ("Source Environment", "Discovery", "Migration Platform", "Replication", "Target Cloud"),
            ("Source VM", "Migration Agent", "Staging Area", "Target VM", "Validation"),
            ("Inventory", "Wave Plan", "Pre-Flight Checks", "Cutover", "Decommission"),
            ("Legacy OS", "OS Upgrade Engine", "Driver Injection", "Modernized OS", "Post-Migration Tuning"),
            ("Source Hypervisor", "Migration Appliance", "Data Transfer", "Target Hypervisor"),
            ("On-Premises Workloads", "Migration Orchestrator", "AWS", "Azure", "Google Cloud"),
            ("Snapshot", "Incremental Sync", "Final Sync", "Switchover", "Rollback Point"),
        ),
        layouts=("horizontal", "left-to-right", "swim-lanes", "hierarchical", "staged", "funnel"),
    ),
    DiagramCategory.CLOUD: CategoryCatalog(
        keywords=(
            "cloud", "aws", "azure", "gcp", "google cloud", "amazon",
            "microsoft", "saas", "iaas", "paas", "kubernetes", "container",
            "serverless", "region", "appliance", "vmware", "openstack",
        ),
        specific_types=(
            "Cloud Landing Zone",
            "Multi-Region Deployment",
            "Hybrid Cloud Architecture",
            "Cloud Account Structure",
            "Container Platform",
            "Serverless Application",
            "Shared Services Hub",
        ),
        palettes=(
            _palette("#232F3E", "#FF9900", "#146EB4"),
            _palette("#0078D4", "#50E6FF", "#FFB900"),
            _palette("#4285F4", "#34A853", "#FBBC05"),
            _palette("#1C2541", "#3A506B", "#5BC0BE"),
            _palette("#2C3E50", "#18BC9C", "#F39C12"),
            _palette("#0B132B", "#6FFFE9", "#FFD166"),
        ),
        element_sets=(
            ("Cloud Account", "Region", "Availability Zones", "Compute Instances", "Managed Database"),
            ("Identity Provider", "IAM Roles", "Key Management", "Audit Trail"),
            ("Kubernetes Cluster", "Ingress", "Services", "Persistent Volumes", "Container Registry"),
            ("Function Trigger", "Serverless Functions", "Queue", "Object Storage"),
            ("On-Premises", "Direct Connect", "Cloud Network", "Shared Services", "Workload Accounts"),
            ("Cloud Appliance", "Launch Template", "Target Instances", "Monitoring"),
        ),
        layouts=("hierarchical", "nested-groups", "horizontal", "grid", "layered"),
    ),
    DiagramCategory.GENERIC: CategoryCatalog(
        keywords=(),
        specific_types=(
            "Concept Map",
            "Block Diagram",
            "Overview Diagram",
            "Relationship Map",
        ),
        palettes=(
            _palette("#333333", "#8E9AAF", "#EFD3D7"),
            _palette("#2F4858", "#33658A", "#F6AE2D"),
            _palette("#3C1518", "#69140E", "#D58936"),
            _palette("#1D2D44", "#3E5C76", "#F0EBD8"),
            _palette("#343A40", "#6C757D", "#FFC107"),
            _palette("#212529", "#495057", "#20C997"),
        ),
        element_sets=(
            ("Input", "Processing", "Output", "Feedback"),
            ("Users", "Platform", "Integrations", "Data"),
            ("Goal", "Drivers", "Constraints", "Outcomes"),
            ("Overview", "Key Concepts", "Relationships", "Examples"),
        ),
        layouts=("horizontal", "vertical", "radial", "grid"),
    ),
}

# Category keyword matching only uses these; GENERIC is never scored.
SCORED_CATEGORIES: tuple[DiagramCategory, ...] = (
    DiagramCategory.NETWORK,
    DiagramCategory.PROCESS,
    DiagramCategory.SOFTWARE,
    DiagramCategory.MIGRATION,
    DiagramCategory.CLOUD,
)

# Domain glossary for context-term extraction in the synthesizer.
TECHNICAL_GLOSSARY: tuple[str, ...] = (
    "Migration Engine", "Replication", "Cutover", "Discovery", "Appliance",
    "Hypervisor", "VMware", "AWS", "Azure", "Google Cloud", "OpenStack",
    "Kubernetes", "Load Balancer", "Firewall", "VPC", "Subnet", "API Gateway",
    "Database", "Object Storage", "Snapshot", "Incremental Sync", "Driver Injection",
    "OS Upgrade", "Windows Server", "RHEL", "Ubuntu", "Pre-Flight Check",
    "Target Cloud", "Source Environment", "Orchestrator",
)

# Used when context snippets are empty or yield nothing useful.
FALLBACK_GLOSSARY: tuple[str, ...] = ("Platform", "Automation", "Monitoring", "Security")


def get_catalog(category: DiagramCategory) -> CategoryCatalog:
    """Return the catalog entry for a category."""
    try:
        return CATALOG[category]
    except KeyError as e:
        raise KeyError(f"No diagram catalog entry for category {category!r}") from e
