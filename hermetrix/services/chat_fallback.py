"""
Canned chat answers used when the model is unavailable.
Rules are evaluated top to bottom; the first rule with a keyword starting a word of the message wins.
"""
import re
from typing import NamedTuple


class FallbackRule(NamedTuple):
    topic: str
    keywords: tuple[str, ...]


FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule("pcos", ("pcos", "pcod")),
    FallbackRule("thyroid", ("thyroid",)),
    FallbackRule("exercise", ("exercise", "workout", "physical activity")),
    FallbackRule("nutrition", ("nutrition", "diet", "eat")),
    FallbackRule("stress", ("stress", "anxiety", "mental health")),
    FallbackRule("symptoms", ("symptom", "sign")),
)

HEALTH_KNOWLEDGE_BASE: dict[str, str] = {
    "pcos": (
        "PCOS management involves a multi-faceted approach:\n\n"
        "1. **Lifestyle Modifications:**\n"
        "   - Regular exercise: Aim for 150 minutes moderate cardio + 2-3 strength training sessions weekly\n"
        "   - Diet: Focus on low glycemic index foods, lean proteins, and healthy fats\n"
        "   - Stress management: Practice yoga, meditation, or deep breathing\n\n"
        "2. **Nutrition Tips:**\n"
        "   - Increase fiber intake (whole grains, vegetables)\n"
        "   - Limit processed foods and sugary drinks\n"
        "   - Include omega-3 rich foods (fish, flaxseeds, walnuts)\n\n"
        "3. **Regular Monitoring:**\n"
        "   - Get insulin and glucose levels checked\n"
        "   - Monitor hormonal levels as recommended by your doctor\n"
        "   - Track symptoms and cycles\n\n"
        "4. **Medical Support:**\n"
        "   - Consult your doctor about medication options if lifestyle changes aren't enough\n"
        "   - Regular check-ups every 3-6 months\n\n"
        "Every person's PCOS journey is unique. Work with your healthcare provider on a personalized plan."
    ),
    "thyroid": (
        "Thyroid health is crucial for overall wellness:\n\n"
        "1. **Key Thyroid Markers:**\n"
        "   - TSH (Thyroid Stimulating Hormone): typical range 0.5-5.0 mIU/L\n"
        "   - Free T4: thyroid hormone production\n"
        "   - Free T3: active thyroid hormone\n\n"
        "2. **Symptoms to Watch For:**\n"
        "   - Unexplained weight changes, fatigue and low energy\n"
        "   - Mood changes, hair loss or dry skin\n"
        "   - Temperature sensitivity\n\n"
        "3. **Healthy Thyroid Habits:**\n"
        "   - Adequate iodine (seafood, dairy) and selenium (nuts, seeds)\n"
        "   - Manage stress, exercise regularly, sleep 7-9 hours\n\n"
        "4. **Regular Testing:**\n"
        "   - On thyroid medication: test every 6-12 months\n"
        "   - With symptoms: ask your doctor for a complete thyroid panel\n\n"
        "Always work with your healthcare provider for diagnosis and treatment."
    ),
    "exercise": (
        "Regular exercise is essential for hormonal health:\n\n"
        "1. **Recommended Exercise Types:**\n"
        "   - **Cardio:** walking, swimming, cycling (150 min/week moderate intensity)\n"
        "   - **Strength Training:** 2-3 sessions weekly to improve insulin sensitivity\n"
        "   - **Flexibility:** yoga or stretching to reduce stress\n\n"
        "2. **Benefits for Women's Health:**\n"
        "   - Improves insulin sensitivity (helps with PCOS)\n"
        "   - Reduces inflammation and helps regulate cycles\n"
        "   - Improves mood and reduces anxiety\n\n"
        "3. **Getting Started:**\n"
        "   - Start slowly and build gradually\n"
        "   - Find activities you enjoy and keep consistent times\n\n"
        "Consult your doctor before starting a new program. Consistency matters more than intensity."
    ),
    "nutrition": (
        "Nutrition plays a vital role in hormonal health:\n\n"
        "1. **Foods to Emphasize:**\n"
        "   - Lean proteins: chicken, fish, legumes, tofu\n"
        "   - Whole grains: oats, brown rice, quinoa\n"
        "   - Healthy fats: olive oil, avocado, nuts, seeds\n"
        "   - Colorful vegetables and leafy greens\n\n"
        "2. **Foods to Limit:**\n"
        "   - Refined carbohydrates and sugary drinks\n"
        "   - Fried and heavily processed foods\n"
        "   - Excess caffeine and alcohol\n\n"
        "3. **Eating Patterns:**\n"
        "   - Regular meals to stabilize blood sugar\n"
        "   - Protein with every meal, stay hydrated\n\n"
        "Consider a registered dietitian for personalized guidance."
    ),
    "stress": (
        "Stress management is essential for hormonal balance:\n\n"
        "1. **Why It Matters:**\n"
        "   - Elevated cortisol disrupts hormonal balance\n"
        "   - Can worsen PCOS and thyroid symptoms\n\n"
        "2. **Techniques:**\n"
        "   - Meditation: start with 5-10 minutes daily\n"
        "   - Deep breathing: 4-7-8 or box breathing\n"
        "   - Gentle yoga, journaling, time in nature\n\n"
        "3. **When to Seek Help:**\n"
        "   - Stress affects daily functioning\n"
        "   - Persistent anxiety or low mood\n\n"
        "Stress management is an ongoing practice. Be patient and kind with yourself."
    ),
    "symptoms": (
        "Common women's health symptoms and when to seek care:\n\n"
        "1. **Hormonal Signs:** irregular or heavy periods, severe cramping, unexplained weight changes, "
        "acne, hair loss or excess hair growth\n\n"
        "2. **Thyroid Signs:** fatigue despite sleep, temperature sensitivity, dry skin\n\n"
        "3. **See a Doctor When:**\n"
        "   - Symptoms persist for more than 2-3 months\n"
        "   - Symptoms significantly impact daily life\n\n"
        "4. **Seek Immediate Care For:** severe chest or abdominal pain, difficulty breathing, "
        "confusion, high fever\n\n"
        "Trust your body. If something feels wrong, get it checked."
    ),
}

DEFAULT_RESPONSE = (
    "I'm here to support your women's health journey! I can help you with:\n\n"
    "• **PCOS/PCOD** management and lifestyle tips\n"
    "• **Thyroid health** monitoring and care\n"
    "• **Exercise routines** for hormonal balance\n"
    "• **Nutrition** advice for wellness\n"
    "• **Stress management** techniques\n"
    "• **Symptom** understanding and tracking\n\n"
    "Ask me about any of these topics. Always consult your healthcare provider for personalized medical advice."
)


def match_topic(message: str) -> str | None:
    """Keywords match at the start of a word: "eating" hits "eat", "great" does not."""
    lower = (message or "").lower()
    for rule in FALLBACK_RULES:
        if any(re.search(rf"\b{re.escape(k)}", lower) for k in rule.keywords):
            return rule.topic
    return None


def fallback_response(message: str) -> str:
    topic = match_topic(message)
    if topic is None:
        return DEFAULT_RESPONSE
    return HEALTH_KNOWLEDGE_BASE[topic]
