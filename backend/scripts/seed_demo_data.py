"""Seed a small directory (owner, one team with a lead, two members) for local testing."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from credit_engine.db.database import SessionLocal, init_db
from credit_engine.models.models import Role, Team, User

TEAM_ID = 't-platform'

USERS = [
    ("u-owner", "Olive Owner", "owner@example.com", Role.OWNER, None),
    ("u-lead", "Lee Lead", "lead@example.com", Role.ADMIN, TEAM_ID),
    ("u-ana", "Ana Member", "ana@example.com", Role.MEMBER, TEAM_ID),
    ("u-ben", "Ben Member", "ben@example.com", Role.MEMBER, TEAM_ID),
]


def seed_data():
    init_db()
    db = SessionLocal()
    try:
        if db.query(Team).filter(Team.id == TEAM_ID).first() is None:
            db.add(Team(id=TEAM_ID, name="Platform", lead_id="u-lead"))
            print(f"Created team {TEAM_ID}")

        for user_id, name, email, role, team_id in USERS:
            if db.query(User).filter(User.id == user_id).first():
                print(f"User {user_id} already exists")
                continue
            db.add(User(id=user_id, name=name, email=email, role=role.value, team_id=team_id))
            print(f"Created {role.value} {user_id}")

        db.commit()
        print("Try: curl -H 'X-Actor-Id: u-owner' http://localhost:8000/api/credit/weights/t-platform")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
