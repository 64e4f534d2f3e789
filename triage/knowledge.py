"""
triage/knowledge.py

Static symptom knowledge base used by the rule-based triage engine.
Read-only at runtime. Keys are normalized (lowercase, trimmed) symptom phrases.
"""

from typing import Literal, NamedTuple

Severity = Literal["mild", "moderate", "severe"]


class SymptomRecord(NamedTuple):
    conditions: tuple[str, ...]
    recommendations: tuple[str, ...]
    severity: Severity
    advice: str


_ABDOMINAL_CONDITIONS = ("Gastritis", "Indigestion", "IBS", "Appendicitis (if severe)", "Food poisoning")
_ABDOMINAL_RECOMMENDATIONS = (
    "Avoid spicy, fatty, or acidic foods",
    "Eat smaller, more frequent meals",
    "Apply a warm compress to the abdomen",
    "Consider antacids for indigestion",
)

SYMPTOM_DATABASE: dict[str, SymptomRecord] = {
    # Gastrointestinal
    "diarrhea": SymptomRecord(
        ("Gastroenteritis (stomach flu)", "Food poisoning", "Irritable Bowel Syndrome (IBS)", "Bacterial infection"),
        (
            "Drink plenty of fluids (water, electrolyte solutions, clear broths)",
            "Avoid dairy, fatty foods, and caffeine",
            "Eat BRAT diet: Bananas, Rice, Applesauce, Toast",
            "Consider oral rehydration solutions to prevent dehydration",
        ),
        "moderate",
        "Diarrhea can lead to dehydration quickly. Drink plenty of fluids and seek medical attention if it lasts more than 2 days, you have signs of dehydration (dry mouth, dark urine, dizziness), or if you see blood in stool.",
    ),
    "loose stool": SymptomRecord(
        ("Gastroenteritis", "Food intolerance", "IBS", "Bacterial infection"),
        (
            "Stay hydrated with water and electrolyte drinks",
            "Avoid spicy, fatty, or dairy foods",
            "Eat bland foods like rice, bananas, and toast",
            "Rest and avoid strenuous activity",
        ),
        "moderate",
        "Monitor your symptoms. If loose stools persist for more than 3 days or are accompanied by fever, blood, or severe dehydration, consult a healthcare provider.",
    ),
    "constipation": SymptomRecord(
        ("Dehydration", "Dietary fiber deficiency", "IBS", "Medication side effects"),
        (
            "Increase fiber intake (fruits, vegetables, whole grains)",
            "Drink plenty of water (8-10 glasses daily)",
            "Engage in regular physical activity",
            "Consider over-the-counter fiber supplements or stool softeners",
        ),
        "mild",
        "Most constipation resolves with dietary changes and increased hydration. See a doctor if it lasts more than 2 weeks, is severe, or accompanied by blood in stool.",
    ),
    "nausea": SymptomRecord(
        ("Gastroenteritis", "Food poisoning", "Motion sickness", "Pregnancy", "Medication side effects"),
        (
            "Eat small, bland meals throughout the day",
            "Avoid strong smells and spicy foods",
            "Stay hydrated with small sips of water or ginger tea",
            "Get fresh air and rest in a quiet environment",
        ),
        "moderate",
        "Nausea is usually temporary. Seek medical attention if it persists for more than 2 days, you cannot keep fluids down, or if you experience severe vomiting.",
    ),
    "vomiting": SymptomRecord(
        ("Gastroenteritis", "Food poisoning", "Viral infection", "Migraine", "Motion sickness"),
        (
            "Rest and avoid solid foods for a few hours",
            "Sip small amounts of clear fluids (water, electrolyte solutions)",
            "Gradually reintroduce bland foods (crackers, toast)",
            "Avoid dairy, caffeine, and alcohol",
        ),
        "moderate",
        "Vomiting can cause dehydration. If vomiting persists for more than 24 hours, you cannot keep fluids down, see blood in vomit, or have signs of dehydration, seek immediate medical care.",
    ),
    "stomach pain": SymptomRecord(
        _ABDOMINAL_CONDITIONS,
        _ABDOMINAL_RECOMMENDATIONS,
        "moderate",
        "Mild stomach pain often resolves with dietary changes. Seek immediate medical attention if pain is severe, persistent, located in lower right abdomen, or accompanied by fever, vomiting, or blood in stool.",
    ),
    "abdominal pain": SymptomRecord(
        _ABDOMINAL_CONDITIONS,
        _ABDOMINAL_RECOMMENDATIONS,
        "moderate",
        "Mild abdominal pain often resolves with dietary changes. Seek immediate medical attention if pain is severe, persistent, located in lower right abdomen, or accompanied by fever, vomiting, or blood in stool.",
    ),
    # Respiratory
    "cough": SymptomRecord(
        ("Common cold", "Upper respiratory infection", "Bronchitis", "Allergies", "Asthma"),
        (
            "Stay hydrated with warm fluids (tea, soup)",
            "Use a humidifier or steam inhalation",
            "Avoid irritants like smoke and dust",
            "Get plenty of rest and consider cough drops",
        ),
        "moderate",
        "Most coughs resolve within 1-2 weeks. See a doctor if cough persists for more than 3 weeks, produces blood, is accompanied by chest pain or difficulty breathing, or if you have a high fever.",
    ),
    "sore throat": SymptomRecord(
        ("Viral pharyngitis", "Strep throat (bacterial)", "Common cold", "Allergies"),
        (
            "Gargle with warm salt water several times daily",
            "Drink warm fluids (tea with honey, soup)",
            "Use throat lozenges or sprays",
            "Rest your voice and avoid irritants",
        ),
        "moderate",
        "Most sore throats are viral and resolve in 3-7 days. See a doctor if symptoms persist, you have difficulty swallowing, high fever, or white spots on tonsils (possible strep throat).",
    ),
    "runny nose": SymptomRecord(
        ("Common cold", "Allergies", "Sinusitis", "Viral infection"),
        (
            "Use saline nasal spray or rinse",
            "Stay hydrated",
            "Use a humidifier",
            "Consider over-the-counter decongestants or antihistamines",
        ),
        "mild",
        "Runny nose is usually part of a cold or allergies. If it persists for more than 10 days, is accompanied by fever, or you have facial pain, consult a healthcare provider.",
    ),
    "nasal congestion": SymptomRecord(
        ("Common cold", "Allergies", "Sinusitis", "Viral infection"),
        (
            "Use saline nasal spray or rinse",
            "Apply warm compress to face",
            "Use a humidifier",
            "Consider over-the-counter decongestants",
        ),
        "mild",
        "Nasal congestion usually resolves with a cold. See a doctor if it lasts more than 10 days, is accompanied by fever or facial pain, or if you have difficulty breathing.",
    ),
    "difficulty breathing": SymptomRecord(
        ("Asthma", "Anxiety", "Pneumonia", "COPD", "Allergic reaction"),
        (
            "Sit upright and try to stay calm",
            "Avoid triggers (allergens, smoke)",
            "Use prescribed inhaler if available",
            "Seek immediate medical attention if severe",
        ),
        "severe",
        "Difficulty breathing requires immediate medical attention. Go to the emergency room if breathing is severely impaired, you have chest pain, or your lips/fingernails turn blue.",
    ),
    # Head and neurological
    "headache": SymptomRecord(
        ("Tension headache", "Migraine", "Sinus headache", "Dehydration", "Eye strain"),
        (
            "Rest in a dark, quiet room",
            "Apply cold or warm compress to forehead",
            "Stay hydrated",
            "Consider over-the-counter pain relievers (ibuprofen, acetaminophen)",
        ),
        "moderate",
        "Most headaches are tension-related and resolve with rest and pain relievers. Seek immediate medical attention if headache is sudden and severe (thunderclap), accompanied by fever/stiff neck, or if you have vision changes or confusion.",
    ),
    "migraine": SymptomRecord(
        ("Migraine", "Tension headache", "Cluster headache"),
        (
            "Rest in a dark, quiet room",
            "Apply cold compress to head",
            "Avoid triggers (bright lights, loud noises)",
            "Consider prescription migraine medication if available",
        ),
        "moderate",
        "Migraines can be debilitating. If you experience frequent migraines, see a doctor for proper diagnosis and treatment. Seek immediate care if migraine is accompanied by vision loss, confusion, or weakness.",
    ),
    "dizziness": SymptomRecord(
        ("Dehydration", "Low blood pressure", "Inner ear infection", "Anemia", "Vertigo"),
        (
            "Sit or lie down immediately",
            "Stay hydrated",
            "Move slowly when changing positions",
            "Avoid sudden head movements",
        ),
        "moderate",
        "Dizziness can be caused by many factors. If it persists, is severe, or is accompanied by chest pain, difficulty speaking, or loss of consciousness, seek immediate medical attention.",
    ),
    "ear pain": SymptomRecord(
        ("Ear infection (otitis media)", "Swimmer's ear", "Eustachian tube dysfunction", "TMJ disorder"),
        (
            "Apply warm compress to affected ear",
            "Use over-the-counter pain relievers",
            "Avoid inserting anything into the ear",
            "Keep ear dry if it's an outer ear infection",
        ),
        "moderate",
        "Ear pain, especially in children, should be evaluated by a doctor. See a healthcare provider if pain is severe, persists more than 2 days, or is accompanied by fever, hearing loss, or discharge from the ear.",
    ),
    # Fever and body
    "fever": SymptomRecord(
        ("Viral infection", "Bacterial infection", "Inflammatory condition", "Common cold", "Flu"),
        (
            "Stay hydrated with water and electrolyte drinks",
            "Rest and get plenty of sleep",
            "Take fever-reducing medication (acetaminophen or ibuprofen)",
            "Use cool compresses or lukewarm bath",
        ),
        "moderate",
        "Fever is usually a sign of infection. Seek medical attention if fever is above 103°F (39.4°C), persists for more than 3 days, is accompanied by severe symptoms, or if you have a weakened immune system.",
    ),
    "chills": SymptomRecord(
        ("Viral infection", "Bacterial infection", "Fever", "Flu", "Common cold"),
        (
            "Stay warm with blankets",
            "Rest and stay hydrated",
            "Monitor temperature",
            "Take fever-reducing medication if needed",
        ),
        "moderate",
        "Chills often accompany fever and infections. If chills are severe, persistent, or accompanied by high fever, seek medical attention.",
    ),
    "fatigue": SymptomRecord(
        ("Anemia", "Sleep disorder", "Chronic fatigue syndrome", "Depression", "Thyroid issues", "Viral infection"),
        (
            "Ensure adequate sleep (7-9 hours)",
            "Maintain a balanced diet",
            "Stay hydrated",
            "Engage in light exercise",
        ),
        "moderate",
        "Fatigue can have many causes. If it persists for more than 2 weeks, is severe, or is accompanied by other symptoms like weight loss or fever, consult a healthcare provider.",
    ),
    "body ache": SymptomRecord(
        ("Viral infection", "Flu", "Fibromyalgia", "Dehydration", "Overexertion"),
        (
            "Rest and allow body to recover",
            "Apply warm compresses to sore areas",
            "Take over-the-counter pain relievers",
            "Stay hydrated and maintain gentle movement",
        ),
        "moderate",
        "Body aches are common with infections like flu. If aches are severe, persistent, or accompanied by high fever, consult a healthcare provider.",
    ),
    "muscle pain": SymptomRecord(
        ("Muscle strain", "Overexertion", "Fibromyalgia", "Viral infection", "Dehydration"),
        (
            "Rest the affected muscles",
            "Apply ice for first 48 hours, then heat",
            "Gentle stretching and massage",
            "Take over-the-counter pain relievers",
        ),
        "mild",
        "Most muscle pain resolves with rest and self-care. See a doctor if pain is severe, persists for more than a week, or is accompanied by swelling, redness, or fever.",
    ),
    # Skin
    "rash": SymptomRecord(
        ("Allergic reaction", "Contact dermatitis", "Eczema", "Viral infection", "Heat rash"),
        (
            "Avoid scratching the affected area",
            "Apply cool compresses or calamine lotion",
            "Use fragrance-free moisturizers",
            "Identify and avoid potential allergens",
        ),
        "moderate",
        "Most rashes are not serious. Seek medical attention if rash is widespread, accompanied by fever, difficulty breathing, or if it appears suddenly and spreads rapidly.",
    ),
    "itching": SymptomRecord(
        ("Allergic reaction", "Dry skin", "Eczema", "Contact dermatitis", "Insect bites"),
        (
            "Apply cool compresses to itchy areas",
            "Use fragrance-free moisturizers",
            "Avoid hot showers and harsh soaps",
            "Consider over-the-counter antihistamines or hydrocortisone cream",
        ),
        "mild",
        "Mild itching usually resolves with self-care. See a doctor if itching is severe, persistent, widespread, or accompanied by rash, swelling, or difficulty breathing.",
    ),
    # Other
    "chest pain": SymptomRecord(
        ("Heartburn/acid reflux", "Anxiety", "Muscle strain", "Angina", "Heart attack (if severe)"),
        (
            "Rest and avoid strenuous activity",
            "If heartburn, avoid trigger foods and consider antacids",
            "Stay calm and monitor symptoms",
            "Seek immediate medical attention if severe",
        ),
        "severe",
        "Chest pain can be serious. Seek IMMEDIATE emergency medical attention if pain is severe, radiates to arm/jaw, is accompanied by shortness of breath, nausea, or sweating - these could indicate a heart attack.",
    ),
    "back pain": SymptomRecord(
        ("Muscle strain", "Poor posture", "Herniated disc", "Arthritis", "Kidney infection"),
        (
            "Rest and avoid heavy lifting",
            "Apply ice for first 48 hours, then heat",
            "Practice good posture",
            "Gentle stretching and over-the-counter pain relievers",
        ),
        "moderate",
        "Most back pain improves with rest and self-care. See a doctor if pain is severe, persists for more than 2 weeks, radiates down legs, or is accompanied by numbness, weakness, or loss of bladder control.",
    ),
    "joint pain": SymptomRecord(
        ("Arthritis", "Injury", "Bursitis", "Gout", "Overuse"),
        (
            "Rest the affected joint",
            "Apply ice to reduce inflammation",
            "Take over-the-counter anti-inflammatory medication",
            "Gentle range-of-motion exercises",
        ),
        "moderate",
        "Joint pain can have various causes. If pain is severe, persistent, or accompanied by swelling, redness, or fever, consult a healthcare provider.",
    ),
    "eye pain": SymptomRecord(
        ("Eye strain", "Dry eyes", "Conjunctivitis", "Sinusitis", "Foreign object"),
        (
            "Rest eyes and avoid screens",
            "Use artificial tears for dry eyes",
            "Apply warm compress",
            "Avoid rubbing eyes",
        ),
        "moderate",
        "Eye pain should be evaluated by a doctor, especially if it's severe, accompanied by vision changes, discharge, or sensitivity to light.",
    ),
    "sore muscles": SymptomRecord(
        ("Muscle strain", "Overexertion", "Delayed onset muscle soreness (DOMS)", "Viral infection"),
        (
            "Rest and allow muscles to recover",
            "Apply ice for first 48 hours, then heat",
            "Gentle stretching and massage",
            "Stay hydrated and take over-the-counter pain relievers",
        ),
        "mild",
        "Sore muscles usually resolve with rest. If pain is severe, persists for more than a week, or is accompanied by swelling or fever, consult a healthcare provider.",
    ),
}

# Body-area keyword -> conditions, checked in order when no record matches
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("stomach", ("Gastritis", "Indigestion", "IBS")),
    ("belly", ("Gastritis", "Indigestion", "IBS")),
    ("throat", ("Viral pharyngitis", "Strep throat", "Common cold")),
    ("nose", ("Common cold", "Allergies", "Sinusitis")),
    ("chest", ("Heartburn", "Anxiety", "Muscle strain")),
    ("back", ("Muscle strain", "Poor posture", "Herniated disc")),
    ("joint", ("Arthritis", "Injury", "Bursitis")),
    ("muscle", ("Muscle strain", "Overexertion", "Fibromyalgia")),
    ("eye", ("Eye strain", "Dry eyes", "Conjunctivitis")),
    ("ear", ("Ear infection", "Swimmer's ear", "Eustachian tube dysfunction")),
)

GENERIC_CONDITION: str = "General symptoms - consult a healthcare provider for proper diagnosis"

# Keyword bucket -> recommendations, checked in order when no record matches
RECOMMENDATION_BUCKETS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("fever", "temperature"),
        (
            "Stay hydrated with water and electrolyte drinks",
            "Rest and get plenty of sleep",
            "Take fever-reducing medication (acetaminophen or ibuprofen)",
            "Monitor temperature regularly",
        ),
    ),
    (
        ("pain", "ache"),
        (
            "Rest the affected area",
            "Apply ice for first 48 hours, then heat",
            "Take over-the-counter pain relievers (ibuprofen or acetaminophen)",
            "Avoid activities that worsen the pain",
        ),
    ),
    (
        ("cough", "cold"),
        (
            "Stay hydrated with warm fluids (tea, soup)",
            "Use a humidifier or steam inhalation",
            "Get plenty of rest",
            "Consider cough drops or over-the-counter cough medicine",
        ),
    ),
    (
        ("nausea", "vomit"),
        (
            "Eat small, bland meals throughout the day",
            "Stay hydrated with small sips of water or electrolyte drinks",
            "Avoid strong smells and spicy foods",
            "Get fresh air and rest in a quiet environment",
        ),
    ),
    (
        ("headache", "head"),
        (
            "Rest in a dark, quiet room",
            "Apply cold or warm compress to forehead",
            "Stay hydrated",
            "Consider over-the-counter pain relievers",
        ),
    ),
)

GENERIC_RECOMMENDATIONS: tuple[str, ...] = (
    "Get adequate rest (7-9 hours of sleep)",
    "Stay hydrated with water",
    "Monitor symptoms closely",
    "Avoid triggers that may worsen symptoms",
)

SEVERE_KEYWORDS: tuple[str, ...] = (
    "severe",
    "extreme",
    "unbearable",
    "emergency",
    "chest pain",
    "difficulty breathing",
    "loss of consciousness",
)
MILD_KEYWORDS: tuple[str, ...] = ("mild", "slight", "minor", "occasional")

SEVERITY_ADVICE: dict[str, str] = {
    "severe": "These symptoms may require immediate medical attention. Please consult a healthcare provider or visit an emergency room immediately, especially if symptoms are worsening or you have difficulty breathing, chest pain, or loss of consciousness.",
    "moderate": "Monitor your symptoms closely. If they persist for more than 2-3 days, worsen, or are accompanied by fever, severe pain, or other concerning symptoms, consult a healthcare provider for proper evaluation and treatment.",
    "mild": "These symptoms are typically mild and may resolve with self-care including rest, hydration, and over-the-counter remedies. However, if symptoms persist for more than a week, worsen, or you have concerns, consult a healthcare provider for proper diagnosis.",
}
