"""
ReferHub Database Seeder

Creates a demo referrer with four referrals:
- two Pending, one Reviewed, one Hired
- one of them with a hosted resume link
"""

from referhub.db.session import SessionLocal, engine
from referhub.db.base import Base
from referhub.models.user import User
from referhub.models.candidate import Candidate
from referhub.core.security import get_password_hash

DEMO_EMAIL = "referrer@referhub.dev"
DEMO_PASSWORD = "referrer123"

DEMO_CANDIDATES = [
    {
        "name": "Priya Nair",
        "email": "priya.nair@example.com",
        "phone": "+1 555 0101",
        "job_title": "Frontend Engineer",
        "status": "Pending",
        "resume_url": "https://res.cloudinary.com/demo/image/upload/v1/referhub/resumes/priya_nair.pdf",
    },
    {
        "name": "Marcus Lee",
        "email": "marcus.lee@example.com",
        "phone": "+1 555 0102",
        "job_title": "Backend Engineer",
        "status": "Pending",
    },
    {
        "name": "Ana Souza",
        "email": "ana.souza@example.com",
        "phone": "+1 555 0103",
        "job_title": "Product Designer",
        "status": "Reviewed",
    },
    {
        "name": "Tomasz Kowalski",
        "email": "tomasz.k@example.com",
        "phone": "+1 555 0104",
        "job_title": "Data Engineer",
        "status": "Hired",
    },
]


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing = db.query(User).filter(User.email == DEMO_EMAIL).first()
        if existing:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        referrer = User(
            email=DEMO_EMAIL,
            hashed_password=get_password_hash(DEMO_PASSWORD),
            full_name="Sam Rivera",
        )
        db.add(referrer)
        db.flush()  # Get IDs

        for data in DEMO_CANDIDATES:
            db.add(Candidate(referred_by=referrer.id, **data))

        db.commit()

        print("✅ Database seeded successfully!")
        print(f"\n📋 Demo referrer: {DEMO_EMAIL} (password: {DEMO_PASSWORD})")
        print("   - 4 referrals: 2 Pending, 1 Reviewed, 1 Hired")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
