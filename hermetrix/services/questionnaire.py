"""Symptom questionnaire shown before an assessment is submitted."""

QUESTIONS: list[dict] = [
    {
        "id": "irregular_periods",
        "question": "How would you describe your menstrual cycle regularity?",
        "type": "choice",
        "options": [
            "Very regular (28-32 days)",
            "Somewhat irregular (varies by 5-7 days)",
            "Very irregular (unpredictable)",
            "Absent periods",
        ],
    },
    {
        "id": "cycle_length",
        "question": "What is your average cycle length?",
        "type": "choice",
        "options": ["Less than 21 days", "21-35 days (normal)", "36-60 days", "More than 60 days"],
    },
    {
        "id": "hair_growth",
        "question": "Do you experience excessive hair growth (face, chest, back)?",
        "type": "choice",
        "options": ["No", "Mild", "Moderate", "Severe"],
    },
    {"id": "acne", "question": "How would you rate your acne severity?", "type": "scale", "min": 0, "max": 10, "label": "Severity"},
    {
        "id": "weight_changes",
        "question": "Have you experienced unexplained weight gain in the past year?",
        "type": "choice",
        "options": ["No weight gain", "Mild gain (5-10 lbs)", "Moderate gain (10-20 lbs)", "Significant gain (>20 lbs)"],
    },
    {
        "id": "fatigue",
        "question": "How often do you feel unusually tired or fatigued?",
        "type": "choice",
        "options": ["Rarely", "Sometimes (1-2 times per week)", "Often (3-5 times per week)", "Daily"],
    },
    {
        "id": "mood_changes",
        "question": "Do you experience mood swings or anxiety?",
        "type": "choice",
        "options": ["Rarely", "Occasionally", "Frequently", "Very frequently"],
    },
    {"id": "sleep_quality", "question": "How would you rate your sleep quality?", "type": "scale", "min": 0, "max": 10, "label": "Quality"},
    {
        "id": "exercise",
        "question": "How many days per week do you exercise?",
        "type": "choice",
        "options": ["0 days", "1-2 days", "3-4 days", "5+ days"],
    },
    {
        "id": "diet",
        "question": "How would you describe your diet?",
        "type": "choice",
        "options": [
            "Mostly processed foods",
            "Balanced with some processed foods",
            "Mostly whole foods",
            "Strict whole food diet",
        ],
    },
    {"id": "stress", "question": "How would you rate your stress level?", "type": "scale", "min": 0, "max": 10, "label": "Stress"},
    {
        "id": "fertility",
        "question": "Are you experiencing difficulty conceiving (if applicable)?",
        "type": "choice",
        "options": ["Not applicable", "No difficulty", "Some difficulty (<6 months)", "Significant difficulty (>6 months)"],
    },
]
