"""
Seed database with master data and a demo tenant.
"""

import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from app.core.database import db_manager
from app.core.security import hash_password
from app.models import (
    Client,
    MasterReportQuestion,
    RecyclingProcess,
    RecyclingTechnology,
    Tenant,
    User,
    WasteCategory,
    WasteData,
    WasteType,
)
from app.models.role import UserRole
from app.models.waste import WasteStatus, WasteUnit, to_kilograms

DEMO_PASSWORD = "password123"

WASTE_TAXONOMY = {
    "Plastic": [
        "PET (Polyethylene Terephthalate)",
        "HDPE (High-Density Polyethylene)",
        "PVC (Polyvinyl Chloride)",
        "LDPE (Low-Density Polyethylene)",
        "PP (Polypropylene)",
        "PS (Polystyrene)",
        "Mixed Plastics",
    ],
    "Paper & Cardboard": [
        "Corrugated Cardboard",
        "Newspaper",
        "Magazines & Glossy Paper",
        "Office Paper (White & Colored)",
        "Mixed Paper",
        "Paperboard (e.g., cereal boxes)",
    ],
    "Metal": [
        "Aluminum Cans",
        "Steel Cans (Tin Cans)",
        "Aluminum Foil & Trays",
        "Ferrous Scrap Metal",
        "Non-Ferrous Scrap Metal (Copper, Brass)",
    ],
    "Glass": ["Clear Glass", "Brown Glass", "Green Glass"],
    "Organic Waste": [
        "Food Waste (Pre-consumer)",
        "Food Waste (Post-consumer)",
        "Yard Trimmings & Green Waste",
        "Wood & Lumber",
    ],
    "E-Waste": [
        "Batteries (Alkaline, Li-ion)",
        "Small Appliances",
        "IT & Telecom Equipment",
        "Cables & Wires",
        "Lamps & Light Bulbs",
    ],
    "Hazardous Waste": [
        "Paints & Solvents",
        "Oils & Lubricants",
        "Chemicals & Cleaners",
        "Medical Sharps",
    ],
}

TECHNOLOGIES = [
    "Mechanical Recycling",
    "Chemical Recycling (Pyrolysis)",
    "Smelting",
    "Industrial Composting",
    "Anaerobic Digestion",
    "Cullet Processing",
    "Refining and Purification",
    "Secure Destruction & Recovery",
]

MASTER_QUESTIONS = [
    "Executive Summary: What were the key achievements and overall performance for this reporting period?",
    "Program Objectives: What were the primary goals set for waste management and recycling during this time?",
    "Initiatives Implemented: Describe any new programs, training, or operational changes introduced to improve sustainability.",
    "Performance Analysis: How did the actual recycling rates compare to the objectives? Please explain any significant variances.",
    "Challenges Encountered: What were the main obstacles faced (e.g., contamination, logistics, low participation)?",
    "Solutions & Corrective Actions: How were the challenges addressed? What measures were taken to overcome them?",
    "Cost-Benefit Analysis: Were there any notable cost savings or financial benefits realized from the recycling program?",
    "Stakeholder Engagement: How were employees, customers, or the community involved in these initiatives?",
    "Future Goals & Outlook: What are the key objectives and targets for the next reporting period?",
    "Compliance & Regulatory Notes: Are there any compliance-related notes or regulatory changes to be aware of?",
]

# (client index, waste type, technology, quantity, unit, days ago)
SAMPLE_ENTRIES = [
    (0, "Corrugated Cardboard", "Mechanical Recycling", 550.5, WasteUnit.KG, 5),
    (0, "PET (Polyethylene Terephthalate)", "Chemical Recycling (Pyrolysis)", 230.0, WasteUnit.KG, 12),
    (1, "Aluminum Cans", "Smelting", 75.2, WasteUnit.LB, 20),
]


async def seed_data() -> None:
    """Create master data, a demo tenant and a platform super admin."""
    print("🌱 Seeding database...")

    db_manager.init()
    await db_manager.create_all()

    async for db in db_manager.get_session():
        result = await db.execute(select(Tenant))
        if result.first():
            print("⚠️  Database already contains data. Skipping seed.")
            return

        types_by_name: dict[str, WasteType] = {}
        for category_name, type_names in WASTE_TAXONOMY.items():
            category = WasteCategory(name=category_name)
            category.waste_types = [WasteType(name=n) for n in type_names]
            db.add(category)
            types_by_name.update({t.name: t for t in category.waste_types})

        technologies = {name: RecyclingTechnology(name=name) for name in TECHNOLOGIES}
        db.add_all(technologies.values())

        db.add_all(
            MasterReportQuestion(text=text, display_order=i)
            for i, text in enumerate(MASTER_QUESTIONS, start=1)
        )
        await db.flush()
        print(f"✅ Master data: {len(WASTE_TAXONOMY)} categories, {len(TECHNOLOGIES)} technologies")

        tenant = Tenant(company_name="EcoSolutions Inc.")
        db.add(tenant)
        await db.flush()

        admin = User(
            email="admin@ecosolutions.com",
            name="Alice Admin",
            hashed_password=hash_password(DEMO_PASSWORD),
            role=UserRole.ADMIN.value,
            tenant_id=tenant.id,
        )
        db.add(admin)
        await db.flush()

        clients = [
            Client(company_name="Global Tech Corp", tenant_id=tenant.id, created_by_id=admin.id),
            Client(company_name="Local Foods Ltd.", tenant_id=tenant.id, created_by_id=admin.id),
        ]
        db.add_all(clients)
        await db.flush()
        print(f"✅ Tenant: {tenant.company_name} ({admin.email})")

        today = date.today()
        for client_idx, type_name, tech_name, quantity, unit, days_ago in SAMPLE_ENTRIES:
            kg = to_kilograms(quantity, unit)
            day = today - timedelta(days=days_ago)
            entry = WasteData(
                client_id=clients[client_idx].id,
                tenant_id=tenant.id,
                created_by_id=admin.id,
                waste_type_id=types_by_name[type_name].id,
                recycling_technology_id=technologies[tech_name].id,
                quantity=kg,
                unit=unit.value,
                recycled_quantity=kg,
                status=WasteStatus.FULLY_RECYCLED.value,
                pickup_date=day,
                recycled_date=day,
                image_urls=[],
            )
            entry.recycling_processes = [RecyclingProcess(quantity_recycled=kg, recycled_date=day)]
            db.add(entry)
        print(f"✅ Waste entries: {len(SAMPLE_ENTRIES)}")

        db.add(User(
            email="superadmin@platform.com",
            name="Platform Admin",
            hashed_password=hash_password(DEMO_PASSWORD),
            role=UserRole.SUPER_ADMIN.value,
        ))
        print("✅ Super admin: superadmin@platform.com")

    await db_manager.close()
    print("🎉 Seeding finished.")


if __name__ == "__main__":
    asyncio.run(seed_data())
