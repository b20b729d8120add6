"""
scoring/ - Audit scoring engine

Modules:
    utils.py         - Decimal utilities
    catalog.py       - 80-question catalog (immutable Catalog value)
    audit_scorer.py  - score / score_category / score_overall
    maturity.py      - Maturity bands, recommendations, ScoreReport
    report_types.py  - Purchasable report products
"""
