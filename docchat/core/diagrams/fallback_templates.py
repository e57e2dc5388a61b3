"""
Hand-authored fallback diagrams.

Last render tier: when the model's simple markup is missing or too short,
the category's template is used verbatim so the user never gets a blank
diagram.

Dependencies: docchat.models.diagram
System role: Final fallback tier of the render pipeline
"""

from docchat.models.diagram import DiagramCategory

FALLBACK_TEMPLATES: dict[DiagramCategory, str] = {
    DiagramCategory.NETWORK: """flowchart LR
    internet[Internet] --> fw[Perimeter Firewall]
    fw --> lb[Load Balancer]
    lb --> web[Web Tier Subnet]
    web --> app[Application Subnet]
    app --> db[Database Subnet]
    onprem[On-Premises Data Center] -->|Site-to-Site VPN| vpn[VPN Gateway]
    vpn --> app
""",
    DiagramCategory.PROCESS: """flowchart LR
    discovery[Discovery] -->|Environment Analysis| assess[Assessment]
    assess -->|Recommendations| plan[Migration Planning]
    plan -->|Plan Implementation| execute[Execution]
    execute -->|Task Automation| validate[Validation]
    validate -->|Quality Control| optimize[Optimization]
""",
    DiagramCategory.SOFTWARE: """flowchart TD
    ui[Web Dashboard] --> api[API Layer]
    api --> auth[Authentication]
    api --> engine[Migration Engine]
    engine --> connectors[Cloud Provider Connectors]
    engine --> data[Data Management]
    data --> db[(Database)]
    monitor[Monitoring] --> api
    monitor --> engine
""",
    DiagramCategory.MIGRATION: """flowchart LR
    source[Source Environment] -->|Source Data Capture| platform[RiverMeadow Platform]
    platform -->|Workflow Management| orchestrator[Migration Orchestration Engine]
    orchestrator -->|Data Transfer| replication[Data Replication Manager]
    replication -->|Deployment Prep| target[Target Cloud Adapter]
    target -->|Infrastructure Setup| config[Configuration Controller]
""",
    DiagramCategory.CLOUD: """flowchart TD
    platform[RiverMeadow Platform] -->|Secure API Calls| gateway[Cloud API Gateway]
    gateway -->|VM Provisioning| compute[Compute Instances]
    platform -->|Data Replication| storage[Object Storage]
    compute -->|Network Setup| vpc[Virtual Network]
    vpc -->|Permission Assignment| iam[Identity and Access]
""",
    DiagramCategory.GENERIC: """flowchart LR
    input[Input] --> platform[Platform]
    platform --> processing[Processing]
    processing --> output[Output]
    output -->|Feedback| input
""",
}


def fallback_template(category: DiagramCategory) -> str:
    """Return the verbatim fallback markup for a category."""
    return FALLBACK_TEMPLATES.get(category, FALLBACK_TEMPLATES[DiagramCategory.GENERIC])
