"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_MAX_AGE = 7 * 24 * 3600
DEFAULT_TOP_STUDENTS = 10
DEFAULT_LIST_LIMIT = 200
MIN_PASSWORD_LENGTH = 6
UPCOMING_WINDOW_DAYS = 7

# (lower bound in percent, label), checked top-down
ATTENDANCE_RANKS = (
    (95.0, "Excellent"),
    (85.0, "Good"),
    (75.0, "Average"),
)
ATTENDANCE_RANK_FLOOR = "Below Average"

DEPARTMENTS = [
    "Computer Science",
    "Electronics",
    "Mechanical",
    "Civil",
    "Electrical",
    "Information Technology",
    "Mathematics",
    "Physics",
    "Chemistry",
    "English",
    "Commerce",
    "Management",
]

DEGREE_NAMES = [
    "Bachelor of Technology (B.Tech)",
    "Bachelor of Engineering (B.E)",
    "Bachelor of Science (B.Sc)",
    "Bachelor of Commerce (B.Com)",
    "Bachelor of Arts (B.A)",
    "Bachelor of Business Administration (BBA)",
    "Master of Technology (M.Tech)",
    "Master of Science (M.Sc)",
    "Master of Commerce (M.Com)",
    "Master of Arts (M.A)",
    "Master of Business Administration (MBA)",
    "Diploma",
    "Certificate Course",
]

STREAMS = [
    "Computer Science and Engineering",
    "Electronics and Communication Engineering",
    "Mechanical Engineering",
    "Civil Engineering",
    "Electrical Engineering",
    "Information Technology",
    "Aerospace Engineering",
    "Chemical Engineering",
    "Biotechnology",
    "Data Science",
    "Artificial Intelligence",
    "Cybersecurity",
    "Software Engineering",
    "Network Engineering",
    "Mathematics",
    "Physics",
    "Chemistry",
    "Biology",
    "English Literature",
    "History",
    "Economics",
    "Commerce",
    "Business Administration",
    "Management Studies",
]

LEAVE_TYPE_LABELS = {
    "medical": "Medical",
    "personal": "Personal",
    "official": "Official",
    "academic": "Academic",
}

OD_CATEGORY_LABELS = {
    "intercollege": "Intercollege",
    "intracollege": "Intracollege",
    "other": "Other",
}

SHIFT_LABELS = {
    "morning": "Morning",
    "evening": "Evening",
}

OD_STATUS_LABELS = {
    "pending": "Pending Review",
    "approved_by_tutor": "Approved by Tutor",
    "approved_by_hod": "Fully Approved",
    "rejected": "Rejected",
}

DEPARTMENT_EVENTS = {
    "Computer Science": [
        "Tech Fest 2025",
        "Coding Competition",
        "Hackathon",
        "Technical Symposium",
        "Project Exhibition",
        "Guest Lecture Series",
        "Workshop on AI/ML",
        "Database Design Contest",
    ],
    "Electronics": [
        "Electronics Expo",
        "Circuit Design Competition",
        "Robotics Workshop",
        "Embedded Systems Seminar",
        "IoT Innovation Challenge",
        "Signal Processing Conference",
        "VLSI Design Contest",
        "Electronics Project Showcase",
    ],
    "Mechanical": [
        "Mechanical Engineering Expo",
        "CAD Design Competition",
        "Automobile Workshop",
        "Thermodynamics Seminar",
        "Machine Design Contest",
        "Manufacturing Technology Expo",
        "Fluid Mechanics Workshop",
        "Mechanical Project Display",
    ],
    "Civil": [
        "Civil Engineering Expo",
        "Structural Design Competition",
        "Concrete Technology Workshop",
        "Surveying Contest",
        "Environmental Engineering Seminar",
        "Construction Technology Expo",
        "Geotechnical Workshop",
        "Civil Project Exhibition",
    ],
    "Electrical": [
        "Electrical Engineering Expo",
        "Power Systems Workshop",
        "Control Systems Competition",
        "Renewable Energy Seminar",
        "Electrical Safety Workshop",
        "Power Electronics Contest",
        "Smart Grid Conference",
        "Electrical Project Showcase",
    ],
    "Information Technology": [
        "IT Expo 2025",
        "Web Development Competition",
        "Cybersecurity Workshop",
        "Cloud Computing Seminar",
        "Mobile App Development Contest",
        "Data Analytics Workshop",
        "Network Security Conference",
        "IT Project Exhibition",
    ],
    "Mathematics": [
        "Mathematics Olympiad",
        "Statistics Workshop",
        "Mathematical Modeling Contest",
        "Applied Mathematics Seminar",
        "Numerical Analysis Workshop",
        "Mathematical Research Conference",
        "Statistics Project Display",
        "Mathematics Quiz Competition",
    ],
    "Physics": [
        "Physics Expo",
        "Quantum Physics Workshop",
        "Optics Laboratory Contest",
        "Thermodynamics Seminar",
        "Electromagnetism Workshop",
        "Modern Physics Conference",
        "Physics Project Exhibition",
        "Science Fair",
    ],
    "Chemistry": [
        "Chemistry Expo",
        "Organic Chemistry Workshop",
        "Analytical Chemistry Contest",
        "Physical Chemistry Seminar",
        "Inorganic Chemistry Workshop",
        "Chemical Engineering Conference",
        "Chemistry Project Display",
        "Lab Safety Workshop",
    ],
    "English": [
        "Literary Festival",
        "Creative Writing Competition",
        "Public Speaking Workshop",
        "Literature Seminar",
        "Drama Competition",
        "Poetry Recitation Contest",
        "Language Skills Workshop",
        "Cultural Event",
    ],
    "Commerce": [
        "Commerce Expo",
        "Business Plan Competition",
        "Accounting Workshop",
        "Economics Seminar",
        "Marketing Contest",
        "Finance Workshop",
        "Entrepreneurship Conference",
        "Commerce Project Display",
    ],
    "Management": [
        "Management Expo",
        "Case Study Competition",
        "Leadership Workshop",
        "HR Management Seminar",
        "Strategic Planning Contest",
        "Operations Management Workshop",
        "Business Ethics Conference",
        "Management Project Showcase",
    ],
}
