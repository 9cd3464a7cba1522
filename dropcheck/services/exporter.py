import io

import pandas as pd

from dropcheck.schemas.recommendation import SECTION_ORDER, RecommendationBundle
from dropcheck.schemas.test_result import TestResult

HISTORY_CSV_COLUMNS = ["date", "hemoglobin_g_dL", "glucose_mg_dL", "crp_mg_L"]
HISTORY_CSV_FILENAME = "dropcheck_report_history.csv"

BUNDLE_CSV_COLUMNS = ["section", "kind", "title", "text"]
INTRODUCTION = "introduction"
RECOMMENDATION = "recommendation"
RATIONALE = "scientific_rationale"


def history_to_csv(results: list[TestResult]) -> str:
    rows = [[r.date, r.hemoglobin, r.glucose, r.crp] for r in results]
    return pd.DataFrame(rows, columns=HISTORY_CSV_COLUMNS).to_csv(index=False)


def bundle_to_csv(bundle: RecommendationBundle) -> str:
    rows = []
    for key in SECTION_ORDER:
        section = getattr(bundle, key)
        rows.append([key, INTRODUCTION, "", section.introduction])
        for item in section.recommendations:
            rows.append([key, RECOMMENDATION, item.title, item.description])
        rows.append([key, RATIONALE, "", section.scientific_rationale])
    return pd.DataFrame(rows, columns=BUNDLE_CSV_COLUMNS).to_csv(index=False)


def bundle_from_csv(text: str) -> RecommendationBundle:
    df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    missing = set(BUNDLE_CSV_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"missing columns: {', '.join(sorted(missing))}")

    sections: dict[str, dict] = {}
    for row in df.itertuples(index=False):
        section = sections.setdefault(row.section, {"recommendations": []})
        if row.kind == INTRODUCTION:
            section["introduction"] = row.text
        elif row.kind == RECOMMENDATION:
            section["recommendations"].append({"title": row.title, "description": row.text})
        elif row.kind == RATIONALE:
            section["scientific_rationale"] = row.text
        else:
            raise ValueError(f"unknown row kind: {row.kind}")
    return RecommendationBundle.model_validate(sections)
