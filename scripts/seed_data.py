"""
Data Seeder for Simple Todos.
Populates the local store with a few tasks for testing and demo purposes.
"""

import sys
import random
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from simple_todos.infra.config import get_settings
from simple_todos.services.app_context import create_app_context

SAMPLE_TITLES = [
    "Buy milk",
    "Call the plumber",
    "Renew passport",
    "Water the plants",
    "Book dentist appointment",
    "Read chapter 3",
]


def seed():
    settings = get_settings()
    print(f"Seeding tasks into: {settings.get_db_url()}")

    context = create_app_context(settings)
    store = context.store
    existing_titles = {t.title for t in store.tasks}

    for title in SAMPLE_TITLES:
        if title in existing_titles:
            print(f"Task exists: {title}")
            continue
        task = store.add(title)
        print(f"Created task: {title}")
        # Roughly a third of the demo tasks start out done
        if random.random() < 0.33:
            store.toggle(task.id)

    print(f"Seeding complete. {context.projector.remaining} item(s) left.")
    context.close()


if __name__ == "__main__":
    seed()
