"""
gateway/services/first_aid.py

Static first-aid reference with keyword search.
Steps may contain an {emergency_number} placeholder filled in per request.
"""

from typing import Optional

from gateway.schemas import FirstAidTopic

_TOPICS: tuple[dict, ...] = (
    {
        "title": "CPR",
        "description": "Cardiopulmonary resuscitation steps",
        "keywords": ["cpr", "cardiac arrest", "heart", "resuscitation", "breathing", "chest compressions"],
        "steps": [
            "Check for responsiveness: Tap the person's shoulder and shout 'Are you okay?'",
            "Call {emergency_number} immediately or ask someone else to call",
            "Check for breathing: Look for chest rise, listen for breath sounds, feel for breath on your cheek",
            "If not breathing, start chest compressions: Place heel of one hand on center of chest, place other hand on top, interlock fingers",
            "Push hard and fast: Compress chest at least 2 inches deep at rate of 100-120 compressions per minute",
            "Give rescue breaths: After 30 compressions, tilt head back, lift chin, pinch nose, give 2 breaths (1 second each)",
            "Continue cycles: Alternate 30 compressions with 2 breaths until help arrives or person shows signs of life",
            "Use AED if available: Follow the device's voice prompts",
        ],
        "important_notes": [
            "Only perform CPR if the person is unresponsive and not breathing normally",
            "Do not stop CPR unless the person shows signs of life or medical help arrives",
            "If you're untrained, perform hands-only CPR (chest compressions only)",
        ],
        "when_to_call": [
            "Person is unresponsive",
            "No breathing or only gasping",
            "No pulse detected",
        ],
    },
    {
        "title": "Wound Care",
        "description": "Treating cuts and injuries",
        "keywords": ["wound", "cut", "injury", "bleeding", "bandage", "dressing"],
        "steps": [
            "Wash your hands thoroughly with soap and water",
            "Stop the bleeding: Apply gentle pressure with a clean cloth or bandage",
            "Clean the wound: Rinse with cool running water to remove dirt and debris",
            "Apply antiseptic: Use hydrogen peroxide or antiseptic solution if available",
            "Cover the wound: Apply a sterile bandage or dressing",
            "Change dressing daily: Keep the wound clean and dry",
            "Watch for signs of infection: Redness, swelling, pus, or increased pain",
        ],
        "important_notes": [
            "Do not remove objects embedded in the wound - seek medical help",
            "For deep wounds or wounds that won't stop bleeding, seek immediate medical attention",
            "Keep the wound elevated above heart level if possible to reduce bleeding",
        ],
        "when_to_call": [
            "Bleeding won't stop after 10 minutes of direct pressure",
            "Wound is deep or gaping",
            "Object is embedded in the wound",
            "Signs of infection develop",
        ],
    },
    {
        "title": "Choking",
        "description": "Heimlich maneuver guide",
        "keywords": ["choking", "heimlich", "airway", "blocked", "suffocation"],
        "steps": [
            "Recognize choking: Person cannot speak, cough, or breathe, may clutch throat",
            "For adults/children over 1 year: Stand behind the person, wrap arms around their waist",
            "Make a fist: Place thumb side of fist against the person's abdomen, just above navel",
            "Grasp fist with other hand: Press into abdomen with quick upward thrusts",
            "Repeat thrusts: Continue until object is expelled or person becomes unconscious",
            "For infants under 1 year: Hold face down on your forearm, support head and neck, give 5 back blows between shoulder blades, then 5 chest thrusts",
            "If person becomes unconscious: Lower to ground, call {emergency_number}, begin CPR",
        ],
        "important_notes": [
            "Only perform Heimlich maneuver if the person is truly choking and cannot cough or speak",
            "Do not perform on someone who is coughing - encourage them to keep coughing",
            "For pregnant or obese people, perform chest thrusts instead of abdominal thrusts",
        ],
        "when_to_call": [
            "Person cannot breathe, speak, or cough",
            "Person becomes unconscious",
            "Choking persists after attempts to clear airway",
        ],
    },
    {
        "title": "Burns",
        "description": "First aid for burns",
        "keywords": ["burn", "scald", "fire", "heat", "thermal", "chemical"],
        "steps": [
            "Stop the burning process: Remove person from source of burn, remove hot or burned clothing (if not stuck to skin)",
            "Cool the burn: Hold burned area under cool (not cold) running water for 10-20 minutes",
            "Cover the burn: Use a clean, dry cloth or sterile bandage",
            "Do not break blisters: Leave intact to prevent infection",
            "Do not apply ice: Ice can cause further damage to the skin",
            "Do not apply butter, oil, or ointments: These can trap heat and cause infection",
            "Take pain reliever: Use over-the-counter pain medication if needed",
            "Watch for signs of shock: Keep person calm and comfortable",
        ],
        "important_notes": [
            "First-degree burns (red, painful): Usually heal on their own",
            "Second-degree burns (blisters, severe pain): May need medical attention",
            "Third-degree burns (white or charred, no pain): Require immediate medical attention",
            "For chemical burns, flush with water for at least 20 minutes",
        ],
        "when_to_call": [
            "Burns cover large area of body",
            "Third-degree burns",
            "Burns on face, hands, feet, or genitals",
            "Chemical or electrical burns",
            "Signs of smoke inhalation",
        ],
    },
    {
        "title": "Bleeding",
        "description": "How to stop bleeding",
        "keywords": ["bleeding", "hemorrhage", "blood", "wound", "cut"],
        "steps": [
            "Apply direct pressure: Use a clean cloth or bandage and press directly on the wound",
            "Elevate the injured area: Raise it above the level of the heart if possible",
            "Maintain pressure: Keep pressure for at least 5-10 minutes without checking",
            "Add more layers: If blood soaks through, add more cloth on top - do not remove original",
            "Apply pressure to pressure points: If direct pressure doesn't work, press on artery above wound",
            "Keep person calm: Anxiety can increase heart rate and bleeding",
            "Do not remove embedded objects: Stabilize object and seek medical help",
        ],
        "important_notes": [
            "Do not use a tourniquet unless bleeding is life-threatening and cannot be controlled",
            "Wear gloves if available to protect yourself from bloodborne pathogens",
            "For nosebleeds: Sit upright, lean forward, pinch nostrils for 10 minutes",
        ],
        "when_to_call": [
            "Bleeding won't stop after 10 minutes of direct pressure",
            "Bleeding is severe or spurting",
            "Person shows signs of shock (pale, dizzy, weak pulse)",
            "Large amount of blood loss",
        ],
    },
    {
        "title": "Shock",
        "description": "Recognizing and treating shock",
        "keywords": ["shock", "circulatory", "collapse", "fainting", "weak pulse"],
        "steps": [
            "Recognize symptoms: Pale or gray skin, cool and clammy, rapid weak pulse, rapid shallow breathing, confusion, dizziness, weakness",
            "Call {emergency_number} immediately: Shock is a medical emergency",
            "Have person lie down: Elevate legs about 12 inches unless injury prevents this",
            "Keep person warm: Cover with blanket or coat, but do not overheat",
            "Loosen tight clothing: Remove or loosen belts, collars, and restrictive clothing",
            "Do not give food or water: Person may need surgery",
            "Monitor breathing: Be prepared to perform CPR if person stops breathing",
            "Treat cause if possible: Control bleeding, treat injuries",
        ],
        "important_notes": [
            "Shock can be life-threatening and requires immediate medical attention",
            "Do not elevate legs if person has head, neck, or back injury",
            "Keep person calm and reassure them while waiting for help",
        ],
        "when_to_call": [
            "Any signs of shock",
            "Person is unconscious or unresponsive",
            "Rapid or weak pulse",
            "Pale, cool, clammy skin",
        ],
    },
)


def _render(topic: dict, emergency_number: str) -> FirstAidTopic:
    return FirstAidTopic(
        title=topic["title"],
        description=topic["description"],
        keywords=list(topic["keywords"]),
        steps=[step.format(emergency_number=emergency_number) for step in topic["steps"]],
        important_notes=list(topic["important_notes"]),
        when_to_call=list(topic["when_to_call"]),
    )


def search_topics(query: str, emergency_number: str) -> list[FirstAidTopic]:
    """Topics whose title/description contain the query or whose keyword contains it."""
    needle = query.strip().lower()
    return [
        _render(topic, emergency_number)
        for topic in _TOPICS
        if not needle
        or needle in topic["title"].lower()
        or needle in topic["description"].lower()
        or any(needle in keyword for keyword in topic["keywords"])
    ]


def get_topic(title: str, emergency_number: str) -> Optional[FirstAidTopic]:
    for topic in _TOPICS:
        if topic["title"].lower() == title.strip().lower():
            return _render(topic, emergency_number)
    return None
