"""Policy issue catalog.

Defined once at import time and never mutated.
"""

from typing import Optional

from civicpulse.models.issue import IssueCategory, PolicyIssue

ISSUE_CATEGORY_LABELS: dict[IssueCategory, str] = {
    IssueCategory.HOUSING: "Housing & Urban Development",
    IssueCategory.ENVIRONMENT: "Environment & Infrastructure",
    IssueCategory.ECONOMY: "Economy & Labor",
    IssueCategory.SAFETY: "Public Safety & Justice",
    IssueCategory.SOCIAL: "Social Policy",
    IssueCategory.GOVERNANCE: "Governance",
}

POLICY_ISSUES: tuple[PolicyIssue, ...] = (
    # Housing & Urban Development
    PolicyIssue(
        id="housing-development",
        name="Housing Development",
        category=IssueCategory.HOUSING,
        left_label="Preserve neighborhood character",
        right_label="Build more housing",
        description=(
            "Should California prioritize building new housing even if it changes "
            "neighborhood character, or preserve existing communities?"
        ),
    ),
    PolicyIssue(
        id="rent-control",
        name="Rent Control",
        category=IssueCategory.HOUSING,
        left_label="Let market set prices",
        right_label="Expand rent protections",
        description=(
            "Should the state expand rent control protections for tenants, or let "
            "the housing market determine rental prices?"
        ),
    ),
    PolicyIssue(
        id="homelessness",
        name="Homelessness Response",
        category=IssueCategory.HOUSING,
        left_label="Enforcement & mandates",
        right_label="Housing-first approach",
        description=(
            "Should California address homelessness primarily through housing-first "
            "programs, or through enforcement and treatment mandates?"
        ),
    ),
    # Environment & Infrastructure
    PolicyIssue(
        id="wildfire",
        name="Wildfire Prevention",
        category=IssueCategory.ENVIRONMENT,
        left_label="Reduce regulatory burden",
        right_label="Stricter regulations",
        description=(
            "Should California impose stricter building codes and utility regulations "
            "to prevent wildfires, or reduce regulatory burden on development?"
        ),
    ),
    PolicyIssue(
        id="water",
        name="Water Policy",
        category=IssueCategory.ENVIRONMENT,
        left_label="Prioritize supply",
        right_label="Prioritize conservation",
        description=(
            "Should California prioritize water conservation and environmental flows, "
            "or focus on agricultural and urban supply needs?"
        ),
    ),
    PolicyIssue(
        id="energy",
        name="Energy Transition",
        category=IssueCategory.ENVIRONMENT,
        left_label="Keep all energy options",
        right_label="Accelerate renewables",
        description=(
            "Should California accelerate renewable energy mandates, or maintain "
            "diverse energy sources including nuclear and gas for reliability?"
        ),
    ),
    PolicyIssue(
        id="transportation",
        name="Transportation",
        category=IssueCategory.ENVIRONMENT,
        left_label="Roads & car infrastructure",
        right_label="Public transit investment",
        description=(
            "Should California invest heavily in public transit expansion, or "
            "prioritize roads and car infrastructure?"
        ),
    ),
    # Economy & Labor
    PolicyIssue(
        id="gig-workers",
        name="Gig Worker Rights",
        category=IssueCategory.ECONOMY,
        left_label="Flexible contractor status",
        right_label="Employee classification",
        description=(
            "Should gig workers be classified as employees with full benefits, or "
            "maintain flexible independent contractor status?"
        ),
    ),
    PolicyIssue(
        id="tech-regulation",
        name="Tech & AI Regulation",
        category=IssueCategory.ECONOMY,
        left_label="Light-touch regulation",
        right_label="Stronger privacy/AI rules",
        description=(
            "Should California impose stronger AI and data privacy regulations, or "
            "maintain light-touch policies to preserve innovation?"
        ),
    ),
    # Public Safety & Justice
    PolicyIssue(
        id="criminal-justice",
        name="Criminal Justice",
        category=IssueCategory.SAFETY,
        left_label="Tougher enforcement",
        right_label="Reduce incarceration",
        description=(
            "Should California focus on reducing incarceration and rehabilitation, or "
            "prioritize tougher enforcement and sentencing?"
        ),
    ),
    PolicyIssue(
        id="gun-policy",
        name="Gun Policy",
        category=IssueCategory.SAFETY,
        left_label="Protect gun rights",
        right_label="Stricter regulations",
        description=(
            "Should California impose stricter gun regulations, or focus on protecting "
            "Second Amendment rights?"
        ),
    ),
    # Social Policy
    PolicyIssue(
        id="immigration",
        name="Immigration",
        category=IssueCategory.SOCIAL,
        left_label="Federal cooperation",
        right_label="Expand sanctuary protections",
        description=(
            "Should California expand sanctuary protections and services for "
            "immigrants, or increase cooperation with federal enforcement?"
        ),
    ),
    PolicyIssue(
        id="education",
        name="Education",
        category=IssueCategory.SOCIAL,
        left_label="Expand school choice",
        right_label="Increase public funding",
        description=(
            "Should California increase public school funding, or expand school "
            "choice options including charter schools?"
        ),
    ),
    PolicyIssue(
        id="healthcare",
        name="Healthcare",
        category=IssueCategory.SOCIAL,
        left_label="Keep mixed system",
        right_label="Single-payer system",
        description=(
            "Should California move toward a single-payer healthcare system, or "
            "maintain the current mixed public/private system?"
        ),
    ),
    # Governance
    PolicyIssue(
        id="ceqa",
        name="Environmental Review (CEQA)",
        category=IssueCategory.GOVERNANCE,
        left_label="Maintain strong review",
        right_label="Streamline for housing",
        description=(
            "Should California streamline environmental review (CEQA) to speed up "
            "housing and infrastructure projects, or maintain strong environmental "
            "protections?"
        ),
    ),
)

_ISSUES_BY_ID: dict[str, PolicyIssue] = {issue.id: issue for issue in POLICY_ISSUES}


def get_issue(issue_id: str) -> Optional[PolicyIssue]:
    """Look up a catalog issue by id."""
    return _ISSUES_BY_ID.get(issue_id)
