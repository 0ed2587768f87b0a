"""
Description:
Scoring rubrics used to evaluate mock product-management interviews.

The tables in this module are built once at import time and exposed through
read-only mappings. Quick-question practice looks its rubric up by question
category; job-specific interviews use categories with lowercase names that
are normalized onto the titled categories by normalize_category() rather
than duplicated in the table.

Dependencies:
- dataclasses: For immutable rubric records.
- types: For read-only mapping proxies.
- typing: For type annotations.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

SCORE_LEVELS: Tuple[int, ...] = (4, 3, 2, 1)
DEFAULT_CATEGORY = "Behavioral"


@dataclass(frozen=True)
class SkillRubric:
    """One named skill and the description of each score level (4 down to 1)."""
    name: str
    levels: Mapping[int, str]

    def describe(self, level: int) -> str:
        return self.levels[level]


@dataclass(frozen=True)
class CategoryRubric:
    """The four skills evaluated for a quick-question category."""
    category: str
    skills: Tuple[SkillRubric, ...]


def _skill(name: str, four: str, three: str, two: str, one: str) -> SkillRubric:
    return SkillRubric(name=name, levels=MappingProxyType({4: four, 3: three, 2: two, 1: one}))


def _category(category: str, *skills: SkillRubric) -> CategoryRubric:
    return CategoryRubric(category=category, skills=tuple(skills))


CATEGORY_RUBRICS: Mapping[str, CategoryRubric] = MappingProxyType({
    rubric.category: rubric for rubric in (
        _category(
            "Behavioral",
            _skill(
                "Story Structure & Clarity",
                "Clear, concise, well-structured (context → problem → actions → outcome → reflection). Easy to follow.",
                "Mostly structured, minor tangents or missing transitions.",
                "Lacks clear structure. Important elements unclear or jumbled.",
                "Incoherent. Rambling, confusing, missing critical elements.",
            ),
            _skill(
                "Ownership & Accountability",
                "Clear personal ownership. Distinguishes their role, takes responsibility for outcomes.",
                "Shows ownership but occasionally blurs individual vs team contribution.",
                "Over-credits team/external factors. Personal impact unclear.",
                "Avoids responsibility or claims undue credit.",
            ),
            _skill(
                "Impact & Results Orientation",
                "Clearly articulates measurable outcomes (metrics, user impact, business results).",
                "Describes outcomes, but impact may be partially qualitative.",
                "Mentions results superficially, focuses on effort over impact.",
                "No clear outcomes or impact described.",
            ),
            _skill(
                "Communication & Executive Presence",
                "Communicates confidently, succinctly, and credibly.",
                "Communicates clearly but may over- or under-explain.",
                "Inconsistent, overly verbose, or lacking confidence.",
                "Poor communication; difficult to follow.",
            ),
        ),
        _category(
            "Product Sense",
            _skill(
                "Problem Understanding & Framing",
                "Deeply understands the problem space. Asks clarifying questions, identifies constraints and opportunities.",
                "Good problem understanding with minor gaps in exploring edge cases.",
                "Surface-level understanding. Misses key constraints or assumptions.",
                "Fails to understand the problem or makes incorrect assumptions.",
            ),
            _skill(
                "User-Centric Thinking",
                "Clearly identifies user segments, needs, and pain points. Builds solutions around user value.",
                "Shows user awareness but may miss some user segments or needs.",
                "Limited user focus. Solutions feel feature-driven not user-driven.",
                "No clear user consideration in the approach.",
            ),
            _skill(
                "Solution Creativity & Feasibility",
                "Proposes creative yet feasible solutions. Considers technical constraints and business viability.",
                "Solid solutions with some creativity. May overlook feasibility concerns.",
                "Generic solutions or impractical ideas.",
                "Poor solution quality or completely unfeasible proposals.",
            ),
            _skill(
                "Prioritization & Trade-offs",
                "Uses clear frameworks to prioritize. Articulates trade-offs between options.",
                "Shows prioritization thinking but framework usage is inconsistent.",
                "Weak prioritization. Struggles to compare options systematically.",
                "No prioritization logic. Unable to make decisions between options.",
            ),
        ),
        _category(
            "Technical",
            _skill(
                "Technical Communication",
                "Explains technical concepts clearly. Adjusts depth appropriately for audience.",
                "Good technical communication with occasional jargon or unclear explanations.",
                "Struggles to explain technical concepts clearly.",
                "Poor technical communication. Confusing or inaccurate explanations.",
            ),
            _skill(
                "System Design Thinking",
                "Demonstrates understanding of system architecture, scalability, and technical trade-offs.",
                "Shows basic system thinking but may miss scalability or edge cases.",
                "Limited system design awareness.",
                "No evidence of system design thinking.",
            ),
            _skill(
                "Data & Metrics Fluency",
                "Defines clear success metrics. Understands data pipelines and instrumentation needs.",
                "Good metrics thinking but may miss some measurement considerations.",
                "Basic metrics awareness without depth.",
                "No clear approach to measurement or data.",
            ),
            _skill(
                "Engineering Collaboration",
                "Demonstrates effective partnership with engineering. Understands constraints and processes.",
                "Shows collaboration ability but may miss some technical partnership nuances.",
                "Limited engineering collaboration experience evident.",
                "No evidence of effective engineering partnership.",
            ),
        ),
        _category(
            "Strategy",
            _skill(
                "Market & Competitive Analysis",
                "Deep understanding of market dynamics, competitors, and positioning opportunities.",
                "Good market awareness with some gaps in competitive analysis.",
                "Surface-level market understanding.",
                "No evident market or competitive awareness.",
            ),
            _skill(
                "Strategic Thinking",
                "Connects tactical decisions to strategic goals. Considers multiple strategic options.",
                "Shows strategic thinking but may focus too narrowly.",
                "Limited strategic perspective. Focuses on tactics over strategy.",
                "No strategic thinking demonstrated.",
            ),
            _skill(
                "Business Model Understanding",
                "Clear understanding of revenue models, unit economics, and business sustainability.",
                "Good business sense with some gaps in financial/economic thinking.",
                "Basic business awareness without depth.",
                "No business model understanding evident.",
            ),
            _skill(
                "Long-term Vision",
                "Articulates compelling long-term vision. Balances short-term wins with long-term goals.",
                "Shows vision but may struggle to connect short and long-term.",
                "Limited long-term thinking.",
                "No vision beyond immediate features.",
            ),
        ),
        _category(
            "Product Execution",
            _skill(
                "Execution Planning",
                "Creates clear, actionable plans. Breaks down complex work into manageable phases.",
                "Good planning with some gaps in detail or sequencing.",
                "Basic planning without sufficient detail or structure.",
                "No clear execution planning demonstrated.",
            ),
            _skill(
                "Stakeholder Management",
                "Identifies all stakeholders. Manages expectations and alignment effectively.",
                "Good stakeholder awareness with some management gaps.",
                "Limited stakeholder consideration.",
                "No stakeholder management thinking.",
            ),
            _skill(
                "Risk Identification & Mitigation",
                "Proactively identifies risks. Proposes mitigation strategies.",
                "Identifies obvious risks but may miss edge cases.",
                "Limited risk awareness.",
                "No risk thinking demonstrated.",
            ),
            _skill(
                "Delivery & Iteration",
                "Shows strong delivery mindset. Plans for learning and iteration.",
                "Good delivery focus with some gaps in iteration planning.",
                "Basic delivery thinking without iteration mindset.",
                "No clear delivery or iteration approach.",
            ),
        ),
        _category(
            "Analytical",
            _skill(
                "Problem Decomposition",
                "Breaks complex problems into clear, logical components. Systematic approach.",
                "Good decomposition with minor gaps in structure.",
                "Struggles to break down problems systematically.",
                "Unable to decompose problems effectively.",
            ),
            _skill(
                "Quantitative Reasoning",
                "Strong numerical reasoning. Makes reasonable estimates and calculations.",
                "Good quantitative thinking with minor errors.",
                "Basic math skills but struggles with complex reasoning.",
                "Poor quantitative reasoning.",
            ),
            _skill(
                "Data Interpretation",
                "Interprets data accurately. Identifies trends, anomalies, and insights.",
                "Good data interpretation with some missed insights.",
                "Surface-level data interpretation.",
                "Cannot interpret data meaningfully.",
            ),
            _skill(
                "Hypothesis Formation",
                "Forms clear, testable hypotheses. Designs experiments to validate.",
                "Good hypothesis thinking but may miss validation approaches.",
                "Basic hypothesis formation without rigor.",
                "No hypothesis-driven thinking.",
            ),
        ),
        _category(
            "Leadership",
            _skill(
                "Vision & Direction Setting",
                "Sets clear direction. Inspires others with compelling vision.",
                "Good direction setting with some clarity gaps.",
                "Limited vision articulation.",
                "Cannot set clear direction.",
            ),
            _skill(
                "Team Influence & Motivation",
                "Influences without authority. Motivates teams effectively.",
                "Good influence skills with some gaps.",
                "Limited influence beyond direct authority.",
                "Cannot influence or motivate others.",
            ),
            _skill(
                "Conflict Resolution",
                "Handles conflict constructively. Finds win-win solutions.",
                "Resolves conflict but may avoid difficult conversations.",
                "Struggles with conflict resolution.",
                "Avoids or escalates conflict inappropriately.",
            ),
            _skill(
                "Decision Making Under Uncertainty",
                "Makes sound decisions with incomplete information. Comfortable with ambiguity.",
                "Good decision making but may seek excessive certainty.",
                "Struggles to decide without complete information.",
                "Paralyzed by uncertainty.",
            ),
        ),
        _category(
            "Culture Fit",
            _skill(
                "Values Alignment",
                "Demonstrates strong alignment with company values. Articulates personal values clearly.",
                "Good values alignment with some areas to explore.",
                "Unclear values or potential misalignment.",
                "Clear values misalignment.",
            ),
            _skill(
                "Collaboration Style",
                "Collaborative approach. Works well across functions and levels.",
                "Good collaboration with some style preferences.",
                "Limited collaboration evidence.",
                "Poor collaboration style.",
            ),
            _skill(
                "Growth Mindset",
                "Demonstrates continuous learning. Embraces feedback and challenges.",
                "Shows growth orientation with some fixed mindset tendencies.",
                "Limited growth mindset evidence.",
                "Fixed mindset; resistant to feedback.",
            ),
            _skill(
                "Professional Maturity",
                "High EQ. Handles pressure and ambiguity with grace.",
                "Good professional maturity with some development areas.",
                "Some maturity concerns.",
                "Significant maturity concerns.",
            ),
        ),
        _category(
            "Industry Knowledge",
            _skill(
                "Domain Expertise",
                "Deep domain knowledge. Understands industry-specific challenges and opportunities.",
                "Good domain knowledge with some gaps.",
                "Basic industry understanding.",
                "No domain expertise evident.",
            ),
            _skill(
                "Trend Awareness",
                "Aware of industry trends. Connects trends to product opportunities.",
                "Good trend awareness with some blind spots.",
                "Limited trend knowledge.",
                "Unaware of industry trends.",
            ),
            _skill(
                "Regulatory & Compliance Understanding",
                "Understands regulatory landscape. Builds compliance into product thinking.",
                "Good regulatory awareness with some gaps.",
                "Basic compliance awareness.",
                "No regulatory consideration.",
            ),
            _skill(
                "Customer Ecosystem Knowledge",
                "Deep understanding of customer ecosystem, workflows, and pain points.",
                "Good customer knowledge with some gaps.",
                "Limited customer ecosystem understanding.",
                "No customer ecosystem knowledge.",
            ),
        ),
    )
})

# Job-specific interviews tag their generated questions with these lowercase
# categories. Company-fit questions are scored on culture-fit skills, role-fit
# questions on behavioral skills.
CATEGORY_ALIASES: Mapping[str, str] = MappingProxyType({
    "behavioral": "Behavioral",
    "product_sense": "Product Sense",
    "company": "Culture Fit",
    "role": "Behavioral",
    "industry": "Industry Knowledge",
})


def normalize_category(category: str) -> str:
    """
    Map a question category onto a key of CATEGORY_RUBRICS.

    Aliases are resolved first; anything still unknown falls back to
    DEFAULT_CATEGORY.
    """
    if category in CATEGORY_RUBRICS:
        return category
    aliased = CATEGORY_ALIASES.get(category)
    if aliased is not None:
        return aliased
    return DEFAULT_CATEGORY


def get_category_rubric(category: str) -> CategoryRubric:
    return CATEGORY_RUBRICS[normalize_category(category)]


_GENERAL_GUIDANCE = """## General PM Interview Framework

Strong answers typically demonstrate:

**Clear Communication**: Structured, concise responses
**Evidence-Based**: Specific examples and metrics
**User Focus**: Customer-centric thinking
**Business Awareness**: Understanding of business impact
**Self-Reflection**: Lessons learned and growth"""

CATEGORY_GUIDANCE: Mapping[str, str] = MappingProxyType({
    "Behavioral": """## N+STAR+TL Framework

The best PM candidates structure their behavioral answers using this elevated STAR method:

**N - Nugget**: Quick summary that hooks the interviewer
**S - Situation**: Concise context setting
**T - Task**: Their specific role/responsibility
**A - Action**: Specific actions THEY took (not the team)
**R - Result**: Quantified outcomes with metrics
**T - Takeaway**: Lessons learned
**L - Learning**: How they applied those lessons""",
    "Product Sense": """## Product Sense Framework

Strong product sense answers typically include:

**Problem Clarification**: Asking clarifying questions to understand scope, constraints, and goals
**User Segmentation**: Identifying and prioritizing target users
**Pain Points**: Understanding user needs and pain points
**Solution Generation**: Creative yet feasible solutions
**Prioritization**: Using frameworks to prioritize features/solutions
**Success Metrics**: Defining how to measure success""",
    "Technical": """## Technical Interview Framework

Strong technical answers demonstrate:

**System Understanding**: Clear grasp of how systems work
**Technical Depth**: Ability to go deep when needed
**Trade-off Analysis**: Understanding pros/cons of technical decisions
**Collaboration Mindset**: How they work with engineering
**Data Fluency**: Comfort with metrics, analytics, and data pipelines""",
    "Strategy": """## Strategy Framework

Strong strategy answers include:

**Market Analysis**: Understanding of market dynamics and competition
**Business Model**: Clear thinking about revenue and sustainability
**Strategic Options**: Considering multiple paths forward
**Long-term Thinking**: Balancing short-term wins with long-term vision
**Trade-offs**: Articulating what you're choosing NOT to do""",
    "Product Execution": """## Execution Framework

Strong execution answers demonstrate:

**Planning**: Breaking down complex work into phases
**Stakeholder Management**: Identifying and aligning stakeholders
**Risk Management**: Anticipating and mitigating risks
**Delivery Focus**: Shipping mindset with quality
**Iteration**: Learning and improving based on feedback""",
    "Analytical": """## Analytical Framework

Strong analytical answers include:

**Problem Decomposition**: Breaking complex problems into components
**Quantitative Reasoning**: Making reasonable estimates and calculations
**Data Interpretation**: Drawing insights from information
**Hypothesis Thinking**: Forming and testing hypotheses
**Structured Approach**: Systematic problem-solving""",
    "Leadership": """## Leadership Framework

Strong leadership answers demonstrate:

**Vision Setting**: Articulating direction and inspiring others
**Influence**: Leading without formal authority
**Conflict Resolution**: Handling disagreements constructively
**Decision Making**: Making calls with incomplete information
**Team Development**: Growing and empowering others""",
    "Culture Fit": """## Culture Fit Framework

Strong culture fit answers show:

**Values Alignment**: Authentic connection to company values
**Self-Awareness**: Understanding of own strengths and growth areas
**Collaboration**: How they work with others
**Growth Mindset**: Openness to feedback and learning
**Professional Maturity**: Handling pressure and ambiguity""",
    "Industry Knowledge": """## Industry Knowledge Framework

Strong industry answers demonstrate:

**Domain Expertise**: Deep understanding of the industry
**Trend Awareness**: Knowledge of current and emerging trends
**Regulatory Understanding**: Awareness of compliance considerations
**Customer Knowledge**: Understanding of customer ecosystem""",
    "Company Fit": """## Company Fit Framework

Strong company fit answers demonstrate:

**Company Knowledge**: Specific knowledge of the company's mission, products, and values
**Genuine Enthusiasm**: Authentic interest, not generic enthusiasm
**Career Alignment**: Clear connection between your goals and the company
**Cultural Fit**: Understanding of how you'd contribute to the company culture""",
    "Role Fit": """## Role Fit Framework

Strong role fit answers demonstrate:

**Relevant Experience**: Clear examples that map to role requirements
**Skill Transfer**: How existing skills apply to this specific role
**Role Understanding**: Deep knowledge of the position's responsibilities
**Growth Trajectory**: How this role fits your career path""",
})

# Guidance aliases differ from rubric aliases: company and role questions
# keep their own framework text even though they share another rubric.
GUIDANCE_ALIASES: Mapping[str, str] = MappingProxyType({
    "behavioral": "Behavioral",
    "product_sense": "Product Sense",
    "industry": "Industry Knowledge",
    "company": "Company Fit",
    "role": "Role Fit",
})


def get_category_guidance(category: str) -> str:
    key = category if category in CATEGORY_GUIDANCE else GUIDANCE_ALIASES.get(category)
    if key is None:
        return _GENERAL_GUIDANCE
    return CATEGORY_GUIDANCE[key]


FULL_INTERVIEW_SKILLS: Tuple[SkillRubric, ...] = (
    _skill(
        "Story Structure & Clarity",
        "Presents a clear, concise, and well-structured story (context → problem → actions → outcome → reflection). Easy to follow with no unnecessary detail.",
        "Story is mostly structured and understandable, but may include minor tangents or missing transitions.",
        "Story lacks clear structure. Important context or outcomes are unclear or jumbled.",
        "Unable to tell a coherent story. Rambling, confusing, or missing critical elements.",
    ),
    _skill(
        "Ownership & Accountability",
        "Demonstrates clear personal ownership. Explicitly distinguishes their role from others and takes responsibility for both successes and failures.",
        "Shows ownership but occasionally blurs individual contribution with team outcomes.",
        "Over-credits the team or external factors. Personal impact is unclear.",
        "Avoids responsibility entirely or claims undue credit without evidence.",
    ),
    _skill(
        "Decision-Making & Judgment",
        "Explains why decisions were made, including alternatives considered. Shows strong judgment under ambiguity or pressure.",
        "Explains decisions reasonably well, but with limited discussion of alternatives or tradeoffs.",
        "Decisions appear reactive or poorly reasoned. Limited explanation of rationale.",
        "Unable to explain decision-making process or shows consistently poor judgment.",
    ),
    _skill(
        "Impact & Results Orientation",
        "Clearly articulates measurable outcomes (metrics, user impact, business results). Connects actions directly to outcomes.",
        "Describes outcomes, but impact may be partially qualitative or loosely tied to actions.",
        "Mentions results superficially or focuses on effort rather than impact.",
        "No clear outcomes or impact described.",
    ),
    _skill(
        "Learning & Self-Reflection",
        "Demonstrates deep self-awareness. Clearly articulates lessons learned and how behavior changed as a result.",
        "Identifies lessons learned but reflection lacks depth or specificity.",
        "Acknowledges learning at a surface level without clear application.",
        "Shows no reflection or claims they would not change anything.",
    ),
    _skill(
        "Handling Conflict & Stakeholder Management",
        "Navigates conflict thoughtfully. Demonstrates empathy, influence without authority, and effective stakeholder alignment.",
        "Handles conflict competently but may rely on escalation or authority.",
        "Struggles with conflict or avoids addressing it directly.",
        "Escalates unnecessarily, creates conflict, or avoids it entirely.",
    ),
    _skill(
        "Bias for Action & Ownership Under Ambiguity",
        "Proactively identifies problems and takes initiative despite incomplete information. Comfortable making decisions under uncertainty.",
        "Takes action once direction is clear. Some hesitation in ambiguous situations.",
        "Requires significant guidance or validation before acting.",
        "Avoids action or waits indefinitely for direction.",
    ),
    _skill(
        "Cross-Functional Collaboration",
        "Effectively partners across engineering, design, data, and business. Builds trust and drives alignment.",
        "Collaborates well but may struggle in more complex or contentious situations.",
        "Limited collaboration or unclear interaction with cross-functional partners.",
        "Demonstrates poor collaboration or adversarial behavior.",
    ),
    _skill(
        "Communication & Executive Presence",
        "Communicates confidently, succinctly, and credibly. Adjusts depth and framing based on audience.",
        "Communicates clearly but may over- or under-explain at times.",
        "Communication is inconsistent, overly verbose, or lacking confidence.",
        "Poor communication; difficult to follow or disengaging.",
    ),
    _skill(
        "Values, Integrity & Professional Maturity",
        "Demonstrates strong ethical judgment, humility, and respect for others. Aligns actions with company and product values.",
        "Generally professional and values-driven, with minor gaps.",
        "Occasional signs of misaligned priorities or questionable judgment.",
        "Demonstrates poor integrity, blame-shifting, or unprofessional behavior.",
    ),
    _skill(
        "Adaptability & Resilience",
        "Responds constructively to failure, change, or feedback. Demonstrates resilience and growth mindset.",
        "Adapts to change but may take time to recalibrate.",
        "Struggles with change or feedback.",
        "Resistant to feedback or unable to adapt.",
    ),
    _skill(
        "Product Mindset (Behavioral Signal)",
        "Consistently frames experiences through user value, business impact, and long-term product thinking, even in behavioral examples.",
        "Occasionally ties experiences back to product principles.",
        "Focuses mostly on execution or process without product framing.",
        "No evidence of product thinking in examples.",
    ),
)


def job_specific_skills(company_name: str) -> Tuple[SkillRubric, ...]:
    """Six-skill rubric for a job-specific interview at the given company."""
    return (
        _skill(
            "Company Knowledge & Enthusiasm",
            f"Demonstrates deep knowledge of {company_name}'s mission, products, challenges, and culture. Shows genuine enthusiasm and specific reasons for interest.",
            "Good company knowledge with some gaps. Shows clear interest but could be more specific.",
            "Surface-level company knowledge. Generic enthusiasm that could apply to any company.",
            f"Little to no knowledge of {company_name}. No compelling reason for interest.",
        ),
        _skill(
            "Role Fit & Relevant Experience",
            "Experience aligns strongly with role requirements. Clear examples of similar challenges and successes.",
            "Good alignment with most requirements. Some gaps but shows transferable skills.",
            "Limited alignment with role requirements. Struggles to connect experience to this position.",
            "Poor fit for role requirements. No relevant experience demonstrated.",
        ),
        _skill(
            "Industry/Market Awareness",
            f"Deep understanding of {company_name}'s competitive landscape, market challenges, and industry trends.",
            "Good market awareness with some blind spots.",
            "Basic industry understanding without depth.",
            "No market or competitive awareness demonstrated.",
        ),
        _skill(
            "Story Structure & Clarity",
            "Clear, well-structured answers. Uses specific examples with quantified results.",
            "Mostly structured answers with minor gaps in clarity.",
            "Disorganized or vague answers. Lacks specific examples.",
            "Rambling or incoherent answers. Unable to provide clear examples.",
        ),
        _skill(
            "Impact & Results Orientation",
            "Consistently demonstrates measurable impact with specific metrics and outcomes.",
            "Shows impact but metrics are sometimes qualitative or vague.",
            "Focuses on activities rather than outcomes.",
            "No clear impact or results demonstrated.",
        ),
        _skill(
            "Communication & Executive Presence",
            "Confident, articulate, and engaging. Adjusts communication style appropriately.",
            "Clear communication with minor issues.",
            "Inconsistent communication. Overly verbose or lacking confidence.",
            "Poor communication that detracts from content.",
        ),
    )


def render_skills_section(skills: Tuple[SkillRubric, ...]) -> str:
    """Render numbered markdown rubric blocks, one per skill, levels 4 to 1."""
    blocks = []
    for index, skill in enumerate(skills, start=1):
        lines = [f"### {index}. {skill.name}"]
        lines.extend(f"- **{level}**: {skill.describe(level)}" for level in SCORE_LEVELS)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
