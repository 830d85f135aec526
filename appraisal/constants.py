# appraisal/constants.py
# ============================================================
# Fixed tables of the appraisal form
# ============================================================

PART_A = "A"
PART_B = "B"
PART_D = "D"
PART_E = "E"
PARTS = (PART_A, PART_B, PART_D, PART_E)

PART_TITLES = {
    PART_A: "Academic Involvement",
    PART_B: "Research",
    PART_D: "Portfolio",
    PART_E: "Extra Contributions",
}

# ------------------------------------------------------------
# Part A: (key, label, max)
# ------------------------------------------------------------
PART_A_FIELDS = (
    ("resultAnalysis", "Result Analysis", 50),
    ("courseOutcome", "Course Outcome Analysis", 50),
    ("eLearning", "E-Learning Content Development", 50),
    ("academicEngagement", "Academic Engagement", 50),
    ("teachingLoad", "Teaching Load", 50),
    ("projectsGuided", "UG Projects / PG Dissertations Guided", 40),
    ("studentFeedback", "Feedback of Faculty by Student", 100),
    ("ptgMeetings", "Guardian / PTG Meetings", 50),
)
PART_A_MAXES = {key: mx for key, _, mx in PART_A_FIELDS}

# designation -> (factor, max score)
ROLE_FACTORS = {
    "Professor": (0.68, 300),
    "Associate Professor": (0.79, 350),
    "Assistant Professor": (1.0, 440),
}
DEFAULT_ROLE_FACTOR = (1.0, 440)

# ------------------------------------------------------------
# Part B: sections of (key, label)
# ------------------------------------------------------------
PART_B_SECTIONS = (
    ("journals", "Journal Papers", (
        ("sci", "SCI / SCI-E Indexed"),
        ("esci", "ESCI Indexed"),
        ("scopus", "Scopus Indexed"),
        ("ugc", "UGC Listed"),
        ("other_journal", "Other Journals"),
    )),
    ("conference", "Conference Papers", (
        ("conf_international", "International Conference"),
        ("conf_national", "National Conference"),
    )),
    ("books", "Books & Book Chapters", (
        ("book_authored", "Books Authored"),
        ("book_edited", "Books Edited"),
        ("book_chapter", "Book Chapters"),
    )),
    ("citations", "Citations", (
        ("citation_wos", "Web of Science Citations"),
        ("citation_scopus", "Scopus Citations"),
        ("citation_google", "Google Scholar Citations"),
    )),
    ("ip", "Intellectual Property", (
        ("copyright_individual", "Copyright – Individual"),
        ("copyright_institute", "Copyright – Institute"),
        ("patent_individual", "Patent – Individual"),
        ("patent_institute", "Patent – Institute"),
    )),
    ("grants", "Research Grants & Revenue", (
        ("research_grant", "Research Grants"),
        ("training_revenue", "Training Revenue"),
        ("non_research_grant", "Non-Research Grants"),
    )),
    ("startups", "Products, Startups & Awards", (
        ("products", "Products Developed"),
        ("startups", "Startups Founded"),
        ("awards", "Awards & Fellowships"),
        ("mou", "MoUs Signed"),
        ("industry_association", "Industry Association Activities"),
    )),
)
PART_B_KEYS = tuple(key for _, _, items in PART_B_SECTIONS for key, _ in items)

# ------------------------------------------------------------
# Part D / Part E caps
# ------------------------------------------------------------
PORTFOLIO_INSTITUTE = "institute"
PORTFOLIO_DEPARTMENT = "department"
PORTFOLIO_BOTH = "both"
PORTFOLIO_TYPES = (
    (PORTFOLIO_INSTITUTE, "Institute Level"),
    (PORTFOLIO_DEPARTMENT, "Department Level"),
    (PORTFOLIO_BOTH, "Both"),
)
PART_D_SELF_MAX = 60
PART_D_SUPERIOR_MAX = 60
PART_D_TOTAL_MAX = 120
PART_E_MAX = 50
DIRECTOR_MARKS_MAX = 60

# designations that take the administrative (Director / Dean) track in Part D
ADMIN_DESIGNATION_HOD = "hod"
ADMIN_DESIGNATION_DEAN = "dean"
ADMIN_DESIGNATION_ASSOCIATE_DEAN = "associate_dean"
ADMINISTRATIVE_DESIGNATIONS = (
    ADMIN_DESIGNATION_HOD,
    ADMIN_DESIGNATION_DEAN,
    ADMIN_DESIGNATION_ASSOCIATE_DEAN,
)

# ------------------------------------------------------------
# External interaction evaluation: (key, label, max, description)
# ------------------------------------------------------------
INTERACTION_CRITERIA = (
    ("knowledge", "Knowledge", 20, "Subject knowledge, research background, and academic credentials."),
    ("skills", "Skills", 20, "Teaching skills, communication, methodology, and pedagogical approach."),
    ("attributes", "Attributes", 10, "Professional behavior, punctuality, and interpersonal skills."),
    ("outcomesInitiatives", "Outcomes and Initiatives", 20, "Research output, innovative teaching methods, and initiatives."),
    ("selfBranching", "Self Branching", 10, "Professional development and continuous learning efforts."),
    ("teamPerformance", "Team Performance", 20, "Collaboration with colleagues and contribution to team goals."),
)
INTERACTION_MAXES = {key: mx for key, _, mx, _ in INTERACTION_CRITERIA}

# ------------------------------------------------------------
# External reviewer designations
# ------------------------------------------------------------
EXTERNAL_DESIGNATIONS = (
    "Professor",
    "Associate Professor",
    "Assistant Professor",
    "Industry Expert",
    "Researcher",
    "Consultant",
)
