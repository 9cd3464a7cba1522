import json

from dropcheck.schemas.recommendation import SECTION_ORDER, RecommendationRequest

OPTIONAL_SYMPTOMS = (
    ("polyuria", "Frequent Urination (1-10)"),
    ("polydipsia", "Frequent Thirst (1-10)"),
    ("polyphagia", "Frequent Hunger (1-10)"),
)

_SECTION_SHAPE = {
    "introduction": "<one or two sentences tailored to this user>",
    "recommendations": [{"title": "<short title>", "description": "<actionable advice>"}],
    "scientific_rationale": "<why, citing the user's specific values>",
}
OUTPUT_SHAPE = json.dumps({key: _SECTION_SHAPE for key in SECTION_ORDER}, indent=2)


def _num(value: float) -> str:
    return f"{value:g}"


def _joined(items: list[str]) -> str:
    return ", ".join(items) if items else "None"


def _enum(value) -> str:
    return getattr(value, "value", value)


def render_prompt(request: RecommendationRequest) -> str:
    """Render a validated request into the model prompt.

    Menstrual-cycle lines appear only when the field is set. An explicit
    ``irregular_cycles_or_spotting=False`` still renders as "No" rather than
    omitting the line, so the model sees the negative answer.
    """
    lines = [
        "You are an AI health assistant that provides personalized health recommendations.",
        "",
        "Based on the user's health data and test results, provide personalized diet advice, "
        "a customized exercise routine, and general lifestyle tips.",
        "",
        "User Health Data:",
        f"- Age: {_num(request.age)}",
        f"- Height (cm): {_num(request.height_cm)}",
        f"- Weight (kg): {_num(request.weight_kg)}",
        f"- Gender: {_enum(request.gender)}",
        f"- Family History: {_joined(request.family_history)}",
        f"- Regular Medications: {request.regular_medications}",
    ]
    if request.duration_of_periods is not None:
        lines.append(f"- Duration of Periods (days): {_num(request.duration_of_periods)}")
    if request.severity_of_periods is not None:
        lines.append(f"- Severity of Periods: {_enum(request.severity_of_periods)}")
    if request.irregular_cycles_or_spotting is not None:
        lines.append(f"- Irregular Cycles or Spotting: {'Yes' if request.irregular_cycles_or_spotting else 'No'}")

    lines += [
        f"- Dietary Preference: {_enum(request.dietary_preference)}",
        f"- Supplement Use: {_joined(request.supplement_use)}",
        f"- Fatigue Level (1-10): {request.fatigue_level}",
        f"- Dizziness Level (1-10): {request.dizziness_level}",
        f"- Pale Skin or Nails (1-10): {request.pale_skin_or_nails}",
        f"- Shortness of Breath (1-10): {request.shortness_of_breath}",
    ]
    for field_name, label in OPTIONAL_SYMPTOMS:
        score = getattr(request, field_name)
        if score is not None:
            lines.append(f"- {label}: {score}")

    lines += [
        "",
        "Test Results:",
        f"- Hemoglobin (g/dL): {_num(request.hemoglobin)}",
        f"- Glucose (mg/dL): {_num(request.glucose)}",
        f"- CRP (mg/L): {_num(request.crp)}",
        "",
        "For each of diet advice, exercise routine and lifestyle tips give a short introduction, "
        "a list of recommendations with a title and a description, and a scientific rationale. "
        "Ground every rationale in the specific values above; for example, pair a low hemoglobin "
        "with a high fatigue level when advising on iron intake. Respect the dietary preference "
        "and current supplements. Keep the language concise and easy to understand.",
        "",
        "Respond ONLY with a JSON object of exactly this shape:",
        OUTPUT_SHAPE,
    ]
    return "\n".join(lines)
