"""Seed the 2024 strategic taxonomy.

Run from the project root: ``python -m dataset.seed_strategic_objectives``.
Rows that already exist for the year (matched by name) are left alone, so
the script can be re-run.
"""
import argparse
import logging

from sqlalchemy.orm import Session

from db import SessionLocal, init_db
from models.strategic import StrategicObjective, SubStrategicObjective, RiskCategory, StrategicRiskMapping

logger = logging.getLogger(__name__)

STRATEGIC_OBJECTIVES = [
    ("永續發展ESG政策遵循", "人力資源部 李英豪(FRANCE)"),
    ("Margin Margin Margin x Profit Profit Profit", "採購資材群 吳宗庭(CHARLY)"),
    ("降低庫存水位", "產品行銷處 陳志瑋(IBSEN)"),
    ("營收目標400億+拓展通路與市占率", "採購資材群 吳宗庭(CHARLY)"),
    ("強化品牌價值(ADATA,XPG)", "品牌行銷處 劉怡君(JENNIE)"),
    ("專注產品項目(SSD+DRAM+EV+XPG+IA)", "產品研發群 戴子然(NICK)"),
    ("切入AI、生成式AI、AIOT、IOT、區塊鏈應用與碳權領域", "產品研發群 戴子然(NICK)"),
    ("布局文化藝術", "運彩處 林天瓊(TAINCHIUNG)"),
]

RISK_CATEGORIES = [
    ("策略風險", "Strategic Risk"),
    ("營運風險", "Operational Risk"),
    ("財務風險", "Financial Risk"),
    ("新興風險", "Emerging Risk"),
]

# (objective, sub-objective, category)
MAPPINGS = [
    ("永續發展ESG政策遵循", "減碳", "營運風險"),
    ("永續發展ESG政策遵循", "資訊安全", "策略風險"),
    ("永續發展ESG政策遵循", "公司治理", "策略風險"),
    ("Margin Margin Margin x Profit Profit Profit", "達成預算營業利益", "財務風險"),
    ("降低庫存水位", "庫存水位降至16週", "營運風險"),
    ("營收目標400億+拓展通路與市占率", "營收目標400億", "策略風險"),
    ("強化品牌價值(ADATA,XPG)", "維持台灣前20大國際品牌", "策略風險"),
    ("強化品牌價值(ADATA,XPG)", "集團獎項每年5個以上;  產品獎項(ADATA/ XPG)每年30個以上", "策略風險"),
    ("專注產品項目(SSD+DRAM+EV+XPG+IA)", "既有產品定期更新Roadmap", "營運風險"),
    ("專注產品項目(SSD+DRAM+EV+XPG+IA)", "研發單位產出技術為導向的產品Roadmap(前瞻產品)", "營運風險"),
    ("切入AI、生成式AI、AIOT、IOT、區塊鏈應用與碳權領域", "增加Enterprise及Embedded產品Roadmap", "新興風險"),
    ("切入AI、生成式AI、AIOT、IOT、區塊鏈應用與碳權領域", "提升AI專業技能", "新興風險"),
    ("切入AI、生成式AI、AIOT、IOT、區塊鏈應用與碳權領域", "切入碳權交易", "新興風險"),
    ("布局文化藝術", "黑膠音樂博物館試營運期間以一千人次參觀數為目標", "策略風險"),
]


def _existing(db: Session, model, year: int, **filters):
    return db.query(model).filter_by(year=year, is_active=True, **filters).first()


def seed_taxonomy(db: Session, year: int = 2024) -> dict:
    created = {"objectives": 0, "sub_objectives": 0, "categories": 0, "mappings": 0}

    objectives = {}
    for name, leader in STRATEGIC_OBJECTIVES:
        objective = _existing(db, StrategicObjective, year, name=name)
        if not objective:
            objective = StrategicObjective(name=name, leader=leader, year=year)
            db.add(objective)
            created["objectives"] += 1
        objectives[name] = objective

    categories = {}
    for name, description in RISK_CATEGORIES:
        category = _existing(db, RiskCategory, year, name=name)
        if not category:
            category = RiskCategory(name=name, description=description, year=year)
            db.add(category)
            created["categories"] += 1
        categories[name] = category
    db.flush()

    for objective_name, sub_name, category_name in MAPPINGS:
        objective = objectives[objective_name]
        sub = _existing(db, SubStrategicObjective, year, name=sub_name, strategic_objective_id=objective.id)
        if not sub:
            sub = SubStrategicObjective(strategic_objective_id=objective.id, name=sub_name, year=year)
            db.add(sub)
            db.flush()
            created["sub_objectives"] += 1

        category = categories[category_name]
        mapping = _existing(
            db, StrategicRiskMapping, year,
            strategic_objective_id=objective.id,
            sub_strategic_objective_id=sub.id,
            risk_category_id=category.id,
        )
        if not mapping:
            db.add(StrategicRiskMapping(
                strategic_objective_id=objective.id,
                sub_strategic_objective_id=sub.id,
                risk_category_id=category.id,
                year=year,
            ))
            created["mappings"] += 1

    db.commit()
    logger.info("Seeded taxonomy for %s: %s", year, created)
    return created


def main():
    parser = argparse.ArgumentParser(description="Seed strategic objectives, risk categories and mappings")
    parser.add_argument("--year", type=int, default=2024)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    init_db()

    db = SessionLocal()
    try:
        seed_taxonomy(db, args.year)
    finally:
        db.close()


if __name__ == "__main__":
    main()
