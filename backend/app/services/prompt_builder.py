"""
Prompt builder for question generation.
Maps a test type to category guidance, then appends topic, difficulty and avoid-topic constraints
in that order. Later constraints refine the category guidance; they never replace it.
"""
from app.services.taxonomy import (
    FAMILY_ACT,
    FAMILY_ADAPTIVE,
    FAMILY_AP,
    FAMILY_QUIZ,
    FAMILY_SAT,
    FamilyTable,
    Rule,
    classify,
)

QUESTION_GEN_SYSTEM = """You are an expert exam creator.
Create high-quality, exam-level questions with:
- proper difficulty
- topic alignment
- NO arithmetic questions unless explicitly requested
- use passages when needed
- use logical reasoning
- make answer keys correct

Output a JSON array only. Each item: id, questionText, options (array of answer strings),
correctAnswerIndex (0-based index into options), explanation, topic, difficulty (easy|medium|hard),
and passage when the question refers to one."""

GENERIC = "generic"

_SAT_MATH = """Create {n} SAT Math questions. These should be college-level math problems covering:
- Algebra (linear equations, systems, quadratics)
- Problem solving and data analysis
- Advanced math (functions, polynomials, radicals)
- Geometry and trigonometry
Questions should be challenging and require multi-step reasoning. NO basic arithmetic like "6+7"."""

_AP_HISTORY = """Create {n} AP {history} questions covering:
- Historical periods and developments
- Causation and continuity
- Historical evidence and interpretation
- Contextualization of events
Include passages or historical documents where appropriate."""

_ADAPTIVE = """Create {n} adaptive {exam} Math questions:
- Start with medium difficulty
- Cover key {exam} math topics
- Allow for difficulty adjustment based on performance"""

TEMPLATES: dict[str, str] = {
    "sat_math": _SAT_MATH,
    "sat_math_algebra": _SAT_MATH
    + " Focus specifically on algebraic concepts: equations, inequalities, functions, and systems.",
    "sat_math_geometry": _SAT_MATH
    + " Focus specifically on geometry: shapes, angles, area, volume, coordinate geometry, and trigonometry.",
    "sat_reading_writing": """Create {n} SAT Reading & Writing questions. Include:
- Reading comprehension with passages from literature, science, or history
- Grammar and usage questions
- Vocabulary in context
- Rhetoric and expression
- Standard English conventions
Provide relevant passages where needed.""",
    "sat_diagnostic": """Create {n} diagnostic SAT questions covering a broad range:
- Mix of Math (algebra, geometry, data analysis) and Reading/Writing
- Varied difficulty levels to assess student's current level
- Comprehensive coverage of SAT topics""",
    "act_math": """Create {n} ACT Math questions covering:
- Pre-algebra and elementary algebra
- Intermediate algebra and coordinate geometry
- Plane geometry and trigonometry
Questions should test mathematical reasoning, NOT basic arithmetic.""",
    "act_science": """Create {n} ACT Science questions. These should:
- Include scientific passages with data, graphs, charts, or experimental descriptions
- Test interpretation of scientific information
- Cover biology, chemistry, physics, and earth science concepts
- Require analysis and evaluation of scientific data
Always include relevant passages or data representations.""",
    "act_reading": """Create {n} ACT Reading questions with:
- Passages from prose fiction, social science, humanities, or natural science
- Questions testing comprehension, inference, and analysis
- Focus on main ideas, details, sequence, and author's craft
Include complete passages for context.""",
    "act_english": """Create {n} ACT English questions testing:
- Grammar and usage
- Punctuation and sentence structure
- Strategy and organization
- Style and rhetoric
Provide passages with underlined portions or specific contexts.""",
    "act_diagnostic": """Create {n} diagnostic ACT questions covering:
- Math, Science, Reading, and English sections
- Broad topic coverage to assess overall ACT readiness
- Varied difficulty levels""",
    "ap_calculus": """Create {n} AP Calculus AB questions covering:
- Limits and continuity
- Derivatives and their applications
- Integrals and their applications
- Fundamental Theorem of Calculus
Questions should be college-level and require deep understanding.""",
    "ap_biology": """Create {n} AP Biology questions covering:
- Cell structure and function
- Genetics and heredity
- Evolution and ecology
- Molecular biology and biochemistry
Include scientific reasoning and data analysis questions.""",
    "ap_chemistry": """Create {n} AP Chemistry questions covering:
- Atomic structure and periodicity
- Chemical bonding and molecular structure
- Chemical reactions and stoichiometry
- Thermodynamics and kinetics
Require conceptual understanding and problem-solving.""",
    "ap_physics": """Create {n} AP Physics 1 questions covering:
- Kinematics and dynamics
- Energy and momentum
- Circular motion and gravitation
- Waves and electricity
Focus on conceptual understanding and application.""",
    "ap_world_history": _AP_HISTORY.replace("{history}", "World History"),
    "ap_us_history": _AP_HISTORY.replace("{history}", "US History"),
    "ap_literature": """Create {n} AP English Literature questions:
- Literary analysis and interpretation
- Poetry and prose comprehension
- Literary devices and techniques
- Thematic analysis
Include passages from literature.""",
    "ap_psychology": """Create {n} AP Psychology questions covering:
- Biological bases of behavior
- Cognitive processes
- Development and personality
- Social psychology and research methods
Test conceptual understanding and application.""",
    "ap_diagnostic": """Create {n} diagnostic AP questions covering common AP subjects:
- Mix of STEM and humanities topics
- College-level rigor
- Varied difficulty to assess AP readiness""",
    "quiz": """Create {n} quiz questions:
- Mixed topics across math, science, and reasoning
- Engaging and educational
- Appropriate difficulty for daily practice""",
    "adaptive_sat": _ADAPTIVE.replace("{exam}", "SAT"),
    "adaptive_act": _ADAPTIVE.replace("{exam}", "ACT"),
    GENERIC: """Create {n} high-quality academic questions for "{test_type}":
- Appropriate difficulty and depth
- Clear and unambiguous
- Correct answer keys""",
}

PROMPT_TABLES: dict[str, FamilyTable[str]] = {
    FAMILY_SAT: FamilyTable((
        Rule(("algebra",), "sat_math_algebra"),
        Rule(("geometry",), "sat_math_geometry"),
        Rule(("math",), "sat_math"),
        Rule(("reading", "writing", "rw"), "sat_reading_writing"),
        Rule(("diagnostic",), "sat_diagnostic"),
    )),
    FAMILY_ACT: FamilyTable((
        Rule(("math",), "act_math"),
        Rule(("science",), "act_science"),
        Rule(("reading",), "act_reading"),
        Rule(("english", "writing"), "act_english"),
        Rule(("diagnostic",), "act_diagnostic"),
    )),
    FAMILY_AP: FamilyTable((
        Rule(("calculus", "calc"), "ap_calculus"),
        Rule(("biology",), "ap_biology"),
        Rule(("chemistry",), "ap_chemistry"),
        Rule(("physics",), "ap_physics"),
        Rule(("world",), "ap_world_history"),
        Rule(("history", "ush"), "ap_us_history"),
        Rule(("literature", "lit"), "ap_literature"),
        Rule(("psychology",), "ap_psychology"),
        Rule(("diagnostic",), "ap_diagnostic"),
    )),
    FAMILY_QUIZ: FamilyTable((), default="quiz"),
    FAMILY_ADAPTIVE: FamilyTable((
        Rule(("sat",), "adaptive_sat"),
        Rule(("act",), "adaptive_act"),
    )),
}


def prompt_category(test_type: str) -> str:
    """Template key for test_type; GENERIC when no family/subject rule matches."""
    return classify(test_type, PROMPT_TABLES, GENERIC)


def build_question_prompt(
    test_type: str,
    num_questions: int,
    topic: str | None = None,
    difficulty: str | None = None,
    avoid_topics: list[str] | None = None,
) -> str:
    """User prompt for generate_questions: category guidance plus optional constraints."""
    template = TEMPLATES[prompt_category(test_type)]
    prompt = template.format(n=num_questions, test_type=test_type)
    if topic:
        prompt += f'\n\nSpecific topic focus: "{topic}". Ensure all questions relate to this topic.'
    if difficulty:
        prompt += f"\n\nDifficulty level: {difficulty}. Adjust question complexity accordingly."
    if avoid_topics:
        prompt += f"\n\nAvoid these topics: {', '.join(avoid_topics)}."
    return prompt
