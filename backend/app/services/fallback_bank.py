"""
Offline question bank served when AI generation is unavailable.
Read-only: templates are never mutated; the selector copies fields into fresh Question objects.
"""
from enum import Enum
from types import MappingProxyType


class FallbackCategory(str, Enum):
    SAT_MATH = "SAT_MATH"
    SAT_RW = "SAT_RW"
    ACT_MATH = "ACT_MATH"
    ACT_ENGLISH = "ACT_ENGLISH"
    ACT_SCIENCE = "ACT_SCIENCE"
    AP_BIOLOGY = "AP_BIOLOGY"
    AP_USH = "AP_USH"
    AP_CALC = "AP_CALC"
    AP_CHEM = "AP_CHEM"
    AP_PHYSICS = "AP_PHYSICS"
    AP_PSYCH = "AP_PSYCH"
    AP_WORLD = "AP_WORLD"
    AP_LIT = "AP_LIT"
    DEFAULT = "DEFAULT"


def _q(question_text: str, options: list[str], correct: int, explanation: str, topic: str, difficulty: str) -> dict:
    return {
        "question_text": question_text,
        "options": tuple(options),
        "correct_answer_index": correct,
        "explanation": explanation,
        "topic": topic,
        "difficulty": difficulty,
    }


_BANK: dict[FallbackCategory, tuple[dict, ...]] = {
    FallbackCategory.SAT_MATH: (
        _q("If 3x + 12 = 24, what is the value of x - 4?", ["0", "4", "8", "12"], 0,
           "3x + 12 = 24 => 3x = 12 => x = 4. Therefore, x - 4 = 4 - 4 = 0.", "Algebra", "easy"),
        _q("A line in the xy-plane passes through the origin and has a slope of 1/7. Which of the following points lies on the line?",
           ["(0, 7)", "(1, 7)", "(7, 1)", "(14, 2)"], 2,
           "The equation of the line is y = (1/7)x. If x=7, y=1. So (7,1) lies on the line.", "Heart of Algebra", "medium"),
        _q("If f(x) = (x-2)^2 + 3, what is the minimum value of the function?", ["-2", "2", "3", "0"], 2,
           "The vertex form y = a(x-h)^2 + k shows the minimum at k when a > 0. Here k=3.", "Passport to Advanced Math", "medium"),
        _q("What is the value of 5! / 3!?", ["20", "120", "60", "10"], 0,
           "5! = 120, 3! = 6. 120/6 = 20.", "Arithmetic", "easy"),
        _q("If a triangle has sides 3, 4, and x, which of the following could be the value of x?", ["1", "5", "7", "8"], 1,
           "By the triangle inequality, 3+4 > x, so x < 7. Also 3+x > 4, so x > 1. 5 is the only option.", "Geometry", "medium"),
        _q("Solve for x: 2(x + 5) - 3 = 11.", ["2", "7", "4", "1"], 0,
           "2x + 10 - 3 = 11 => 2x + 7 = 11 => 2x = 4 => x = 2.", "Algebra", "easy"),
        _q("What is the slope of the line passing through (2, 3) and (5, 9)?", ["2", "3", "6", "1.5"], 0,
           "Slope = (9-3)/(5-2) = 6/3 = 2.", "Coordinate Geometry", "easy"),
        _q("If 2^x = 32, what is x?", ["4", "5", "6", "16"], 1,
           "2^5 = 32, so x = 5.", "Exponents", "easy"),
        _q("Find the median of the set {3, 1, 4, 1, 5}.", ["1", "3", "4", "2.8"], 1,
           "Sorted set: {1, 1, 3, 4, 5}. The middle value is 3.", "Statistics", "medium"),
        _q("What is the area of a square with a perimeter of 20?", ["20", "25", "400", "16"], 1,
           "Side = 20/4 = 5. Area = 5^2 = 25.", "Geometry", "easy"),
    ),
    FallbackCategory.SAT_RW: (
        _q("Which choice completes the text with the most logical and precise word or phrase?\n\n"
           "Although the team's performance was initially ____, they managed to secure a victory in the final minutes of the game.",
           ["exemplary", "lackluster", "consistent", "predictable"], 1,
           "'Lackluster' provides the necessary contrast to the eventual victory.", "Vocabulary", "medium"),
        _q("Which of the following sentences uses punctuation correctly?",
           ["The recipe calls for: flour, sugar, and eggs.", "The recipe calls for flour, sugar, and eggs.",
            "The recipe calls for; flour, sugar, and eggs.", "The recipe calls for, flour, sugar, and eggs."], 1,
           "No punctuation is needed between the verb 'for' and the list.", "Standard English Conventions", "easy"),
        _q("The biologist argued that the new species was ____ to the island, meaning it was found nowhere else.",
           ["indigenous", "endemic", "migratory", "introduced"], 1,
           "Endemic refers to a species native and restricted to a certain place.", "Contextual Vocabulary", "medium"),
        _q("Which word is a synonym for 'ephemeral'?", ["Lasting", "Short-lived", "Infinite", "Ancient"], 1,
           "Ephemeral means lasting for a very short time.", "Vocabulary", "medium"),
        _q("Identify the error in the following sentence: 'Neither the players nor the coach were happy.'",
           ["No error", "coach were", "players nor", "with the"], 1,
           "Verb should agree with 'coach' (singular), so 'was happy'.", "Grammar", "hard"),
        _q("Which choice best uses a semicolon?",
           ["I like cake; because it is sweet.", "I like cake; it is sweet.", "I like; cake and cookies.", "I like cake; sweet and tasty."], 1,
           "A semicolon connects two independent clauses.", "Punctuation", "medium"),
        _q("What does the word 'benevolent' mean?", ["Cruel", "Kind", "Strong", "Wealthy"], 1,
           "Benevolent means well-meaning and kindly.", "Vocabulary", "easy"),
        _q("Choose the correct possessive: 'The ____ toys were scattered.'", ["childrens'", "childrens", "children's", "child's"], 2,
           "'Children' is already plural; the possessive is formed by adding 's.", "Grammar", "medium"),
        _q("Which sentence is written in the passive voice?",
           ["The cat chased the mouse.", "The mouse was chased by the cat.", "The cat is chasing the mouse.", "The cat will chase the mouse."], 1,
           "In passive voice, the subject ('mouse') receives the action.", "Grammar", "medium"),
        _q("What is the main purpose of a thesis statement?",
           ["To introduce the author", "To provide a summary of the conclusion", "To state the main argument of the essay", "To list the references used"], 2,
           "A thesis statement clarifies the central claim or argument.", "Writing Skills", "easy"),
    ),
    FallbackCategory.ACT_MATH: (
        _q("In the standard (x,y) coordinate plane, what is the slope of the line 4x + 7y = 12?", ["4/7", "-4/7", "7/4", "-7/4"], 1,
           "Rewrite as y = (-4/7)x + 12/7. Slope is -4/7.", "Coordinate Geometry", "medium"),
        _q("If log(x) = 2, what is x?", ["10", "100", "2", "20"], 1, "10^2 = 100.", "Algebra", "easy"),
        _q("What is the area of a circle with a radius of 5?", ["10π", "25π", "5π", "100π"], 1, "Area = πr^2 = 25π.", "Geometry", "easy"),
        _q("If sin(θ) = 3/5, what is cos(θ) for an acute angle?", ["3/4", "4/5", "1/2", "5/3"], 1,
           "cos^2 = 1 - sin^2 = 1 - 9/25 = 16/25. cos = 4/5.", "Trigonometry", "medium"),
        _q("Solve for x: 3(x - 4) = 15.", ["9", "7", "5", "11"], 0, "3x - 12 = 15 => 3x = 27 => x = 9.", "Algebra", "easy"),
        _q("What is the average of 10, 20, and 60?", ["30", "45", "35", "25"], 0, "(10+20+60)/3 = 90/3 = 30.", "Statistics", "easy"),
        _q("If x + y = 10 and x - y = 2, what is x?", ["4", "6", "8", "5"], 1, "Adding equations: 2x = 12 => x = 6.", "Algebra", "medium"),
        _q("Solve for x: x^2 - 9 = 0.", ["3 only", "-3 only", "3 and -3", "0"], 2, "x^2 = 9 => x = ±3.", "Algebra", "easy"),
        _q("What is the sum of the interior angles of a hexagon, in degrees?", ["360", "540", "720", "1080"], 2,
           "(6-2)*180 = 720.", "Geometry", "medium"),
        _q("What is 20% of 150?", ["15", "30", "20", "45"], 1, "0.20 * 150 = 30.", "Arithmetic", "easy"),
    ),
    FallbackCategory.ACT_ENGLISH: (
        _q("Choose the correct option: 'The group of students ____ going on a field trip tomorrow.'", ["is", "are", "was", "were"], 0,
           "'The group' is singular.", "Subject-Verb Agreement", "easy"),
        _q("Which is most concise? 'The reason why he was late was because of the traffic'",
           ["He was late because of the traffic.", "The reason he was late was the traffic.", "Traffic made him late.",
            "He was late due to the fact that there was traffic."], 2,
           "'Traffic made him late' is most direct.", "Style", "medium"),
        _q("Select the correct punctuation: 'I have three hobbies; running, swimming, and reading.'",
           ["hobbies: running", "hobbies running", "hobbies; running", "hobbies—running"], 0,
           "Colon introduces the list.", "Punctuation", "easy"),
        _q("Select the correct word: 'The team won ____ first game.'", ["its", "it's", "their", "they're"], 0,
           "'Its' indicates possession for the team.", "Pronouns", "easy"),
        _q("Change to singular: 'Every student in the class brought their own book.'", ["No change", "his or her own", "they're own", "one's own"], 1,
           "'Every student' is singular.", "Agreement", "medium"),
        _q("Identify the conjunction: 'I wanted to go, but I was too tired.'", ["wanted", "but", "too", "tired"], 1,
           "'But' is a coordinating conjunction.", "Grammar", "easy"),
        _q("Which word is an adjective? 'The quick brown fox jumps over the lazy dog.'", ["quick", "jumps", "fox", "over"], 0,
           "'Quick' describes the fox.", "Parts of Speech", "easy"),
        _q("Choose the correct form: 'She has ____ to the store already.'", ["went", "gone", "goed", "going"], 1,
           "'Gone' is the past participle used with 'has'.", "Verbs", "medium"),
        _q("Avoid wordiness: 'At this point in time, we are ready.'", ["Now", "Currently", "At this moment", "All of the above"], 3,
           "All are better than the phrase 'at this point in time'.", "Style", "medium"),
        _q("Whose vs Who's: '____ going to the party?'", ["Whose", "Who's", "Whos", "Who is"], 1,
           "'Who's' is the contraction of 'who is'.", "Grammar", "easy"),
    ),
    FallbackCategory.ACT_SCIENCE: (
        _q("What is the purpose of a control group?", ["Baseline for comparison", "Ensure significance", "Increase sample size", "Prove hypothesis"], 0,
           "Used for comparison.", "Experimental Design", "medium"),
        _q("Light intensity is varied to measure growth. What is the independent variable?", ["Height", "Intensity", "Water", "Type"], 1,
           "The manipulated variable.", "Experiments", "easy"),
        _q("Which cell part produces energy?", ["Nucleus", "Ribosome", "Mitochondria", "Golgi"], 2,
           "Mitochondria create ATP.", "Biology", "easy"),
        _q("What is the boiling point of water at sea level?", ["0°C", "100°C", "50°C", "37°C"], 1, "100°C.", "Physics", "easy"),
        _q("Hypothesis A: CO2 warms. Hypothesis B: CO2 cools. Warming observed. Which is supported?",
           ["Hypothesis A", "Hypothesis B", "Both", "Neither"], 0, "Observation matches A.", "Conflict Analysis", "medium"),
        _q("What is the pH of a neutral solution?", ["0", "7", "14", "1"], 1, "pH 7 is neutral.", "Chemistry", "easy"),
        _q("Which is a chemical change?", ["Ice melting", "Water boiling", "Paper burning", "Glass breaking"], 2,
           "Burning creates new substances.", "Chemistry", "medium"),
        _q("What does an anemometer measure?", ["Pressure", "Humidity", "Wind speed", "Rainfall"], 2,
           "Measures wind speed.", "Earth Science", "medium"),
        _q("In the periodic table, what does the atomic number count?", ["Protons", "Neutrons", "Electrons", "Mass"], 0,
           "Atomic number = number of protons.", "Chemistry", "easy"),
        _q("Which planet is largest?", ["Mars", "Earth", "Jupiter", "Venus"], 2, "Jupiter is the largest planet.", "Astronomy", "easy"),
    ),
    FallbackCategory.AP_BIOLOGY: (
        _q("What is the primary function of mitochondria?", ["Protein synthesis", "Waste removal", "ATP production", "Gene storage"], 2,
           "Mitochondria carry out cellular respiration and produce ATP.", "Cell Biology", "medium"),
        _q("What is the role of DNA polymerase?", ["Unzip the helix", "Add nucleotides", "Splice introns", "Translate mRNA"], 1,
           "DNA polymerase builds new DNA strands by adding nucleotides.", "Molecular Biology", "hard"),
        _q("Which hormone lowers blood sugar?", ["Adrenaline", "Insulin", "Estrogen", "Thyroxine"], 1,
           "Insulin lowers blood glucose.", "Physiology", "medium"),
        _q("Which process converts sunlight into chemical energy?", ["Respiration", "Fermentation", "Photosynthesis", "Digestion"], 2,
           "Photosynthesis.", "Plant Biology", "easy"),
        _q("Which of the following describes the secondary structure of a protein?",
           ["Amino acid sequence", "Alpha helices and beta sheets", "Overall 3D shape", "Interaction between subunits"], 1,
           "Secondary structure involves hydrogen bonding into helices and sheets.", "Biochemistry", "medium"),
    ),
    FallbackCategory.AP_USH: (
        _q("What did the 19th Amendment guarantee?", ["Voting rights regardless of race", "Women's right to vote", "Right to bear arms", "Abolition of slavery"], 1,
           "Women's suffrage.", "Progressive Era", "medium"),
        _q("Who was the principal author of the Declaration of Independence?", ["Washington", "Franklin", "Jefferson", "Adams"], 2,
           "Thomas Jefferson.", "Revolution", "easy"),
        _q("What was the main cause of the Civil War?", ["Slavery", "Tariffs", "The Gold Rush", "Prohibition"], 0,
           "Slavery and its expansion into the territories.", "Civil War", "easy"),
        _q("What was the purpose of the Monroe Doctrine?",
           ["End slavery", "Prevent European interference in the Americas", "Annex Texas", "Open trade with China"], 1,
           "It declared the Western Hemisphere off-limits to further European colonization.", "Foreign Policy", "medium"),
    ),
    FallbackCategory.AP_CALC: (
        _q("If f(x) = x^3 - 5x + 2, what is f'(2)?", ["12", "7", "3", "0"], 1,
           "f'(x) = 3x^2 - 5, so f'(2) = 12 - 5 = 7.", "Differentiation", "medium"),
        _q("What is the integral of 2x dx?", ["x^2 + C", "x + C", "2 + C", "x^3 + C"], 0, "∫2x dx = x^2 + C.", "Integration", "easy"),
        _q("What is the derivative of sin(x)?", ["cos(x)", "-cos(x)", "tan(x)", "sin(x)"], 0, "d/dx[sin x] = cos x.", "Differentiation", "easy"),
        _q("The limit of (1/x) as x approaches infinity is?", ["1", "0", "Infinity", "Undefined"], 1,
           "As x grows, 1/x approaches zero.", "Limits", "easy"),
    ),
    FallbackCategory.AP_CHEM: (
        _q("What is the molar mass of H2O?", ["10 g/mol", "18 g/mol", "16 g/mol", "2 g/mol"], 1,
           "H=1, O=16. (2*1) + 16 = 18.", "Stoichiometry", "easy"),
        _q("Which bond involves the sharing of electron pairs?", ["Ionic", "Covalent", "Hydrogen", "Metallic"], 1,
           "Covalent bonds share electrons.", "Bonding", "easy"),
        _q("A solution with a pH of 3 is?", ["Weakly basic", "Strongly acidic", "Neutral", "Weakly acidic"], 1,
           "pH values well below 7 are acidic; 3 is strongly acidic.", "Acids and Bases", "medium"),
    ),
    FallbackCategory.AP_PHYSICS: (
        _q("Force equals mass times ____?", ["Velocity", "Acceleration", "Gravity", "Time"], 1, "F = ma.", "Mechanics", "easy"),
        _q("What is the unit of electrical resistance?", ["Volt", "Ampere", "Ohm", "Watt"], 2,
           "Resistance is measured in Ohms (Ω).", "Electricity", "easy"),
        _q("The acceleration due to gravity on Earth is approximately?", ["5 m/s²", "9.8 m/s²", "12 m/s²", "0 m/s²"], 1,
           "g ≈ 9.8 m/s².", "Mechanics", "easy"),
    ),
    FallbackCategory.AP_PSYCH: (
        _q("Who is known as the father of psychoanalysis?", ["B.F. Skinner", "Sigmund Freud", "Ivan Pavlov", "Carl Rogers"], 1,
           "Freud developed psychoanalytic theory.", "History of Psychology", "easy"),
        _q("The 'fight or flight' response is triggered by which system?", ["Parasympathetic", "Sympathetic", "Somatic", "Central"], 1,
           "The sympathetic nervous system prepares the body for stress.", "Biological Bases", "medium"),
    ),
    FallbackCategory.AP_WORLD: (
        _q("The Silk Road primarily connected which two regions?",
           ["Europe and Africa", "China and the Mediterranean", "Americas and Europe", "India and Japan"], 1,
           "It was a major trade route between the East and West.", "Trade Routes", "easy"),
        _q("The Industrial Revolution first began in which country?", ["USA", "France", "Great Britain", "Germany"], 2,
           "It started in Britain in the late 1700s.", "Modern Era", "easy"),
    ),
    FallbackCategory.AP_LIT: (
        _q("A poem with 14 lines and a specific rhyme scheme is called a ____?", ["Ode", "Sonnet", "Haiku", "Epic"], 1,
           "A sonnet has 14 lines, typically in iambic pentameter.", "Poetry", "easy"),
        _q("Which literary device involves a comparison using 'like' or 'as'?", ["Metaphor", "Simile", "Personification", "Alliteration"], 1,
           "A simile uses comparison words.", "Literary Devices", "easy"),
    ),
    FallbackCategory.DEFAULT: (
        _q("What is the capital of France?", ["London", "Berlin", "Paris", "Madrid"], 2, "Paris.", "General Knowledge", "easy"),
        _q("Which planet is known as the Red Planet?", ["Venus", "Mars", "Jupiter", "Saturn"], 1, "Mars.", "Science", "easy"),
    ),
}

FALLBACK_BANK = MappingProxyType(_BANK)


def get_pool(category: FallbackCategory) -> tuple[dict, ...]:
    """Templates for category; the DEFAULT pool when the category is missing or empty."""
    return FALLBACK_BANK.get(category) or FALLBACK_BANK[FallbackCategory.DEFAULT]
