"""Example: drive the service layer directly, without Flask.

Controllers are a thin layer; all behaviour lives in the services.
"""

import importlib

from config import get_settings_module

from src.medattend.medattend.container import build_container
from src.medattend.medattend.subjects.service import default_component_configs


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        persistence_backend="file",
        cache_dir=settings.LOCAL_CACHE_DIR,
        debounce_seconds=0,
    )
    services = container.for_user("demo")

    if not services.registry.list_subjects():
        subject = services.registry.create_subject("Anatomy", default_component_configs(is_scholarship=services.settings.get().is_scholarship))
        component = subject.components[0]
        services.ledger.toggle(subject.subject_id, component.component_id, "2024-03-01")

    dashboard = services.dashboard.build()
    print(f"Overall: {dashboard.overall.percent:.1f}% (score {dashboard.overall.eligibility_score})")
    for rollup in dashboard.subjects:
        print(f"  {rollup.subject_name}: {rollup.attended}/{rollup.total} {rollup.risk.value}")

    container.sessions.close()


if __name__ == "__main__":
    main()
