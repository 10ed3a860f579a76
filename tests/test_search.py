from taskpilot.models.task import TaskPriority, TaskStatus
from taskpilot.services.search_service import filter_tasks


def _sample(make_task):
    make_task(title="Complete project proposal", description="Finish the draft and send for review",
              priority="High", category="Work")
    make_task(title="Morning jog", description="Run for 30 minutes",
              priority="Medium", category="Health")
    make_task(title="Read book", description="Read chapter 5",
              priority="Low", category="Personal", status="In Progress")


# ========== TEST SEARCH ==========

def test_search_jog(store, make_task):
    """'jog' ne trouve que la tâche Morning jog"""
    _sample(make_task)
    results = store.filter_tasks(search="jog")
    assert [t.title for t in results] == ["Morning jog"]


def test_search_is_case_insensitive(store, make_task):
    _sample(make_task)
    assert [t.title for t in store.filter_tasks(search="MORNING")] == ["Morning jog"]


def test_search_matches_description(store, make_task):
    _sample(make_task)
    assert [t.title for t in store.filter_tasks(search="chapter")] == ["Read book"]


def test_search_substring_not_token(store, make_task):
    _sample(make_task)
    # "ead" apparaît dans "Read book"
    assert [t.title for t in store.filter_tasks(search="ead")] == ["Read book"]


# ========== TEST FILTER ==========

def test_no_criteria_returns_everything(store, make_task):
    _sample(make_task)
    assert len(store.filter_tasks()) == 3
    assert len(store.filter_tasks(status="", priority="", category="", search="")) == 3


def test_filter_by_status(store, make_task):
    _sample(make_task)
    results = store.filter_tasks(status=TaskStatus.IN_PROGRESS)
    assert [t.title for t in results] == ["Read book"]


def test_filter_by_priority_string(store, make_task):
    _sample(make_task)
    results = store.filter_tasks(priority="High")
    assert [t.title for t in results] == ["Complete project proposal"]


def test_filter_by_category(store, make_task):
    _sample(make_task)
    assert [t.title for t in store.filter_tasks(category="Health")] == ["Morning jog"]


def test_filter_combined(store, make_task):
    _sample(make_task)
    assert store.filter_tasks(status="Pending", priority="Low") == []
    results = store.filter_tasks(status="Pending", category="Work", search="draft")
    assert [t.title for t in results] == ["Complete project proposal"]


def test_filter_composition_is_intersection(store, make_task):
    """filter(S, P) ⊆ filter(S) ∩ filter(P)"""
    _sample(make_task)
    make_task(title="Urgent", priority="High", status="In Progress")
    make_task(title="Urgent 2", priority="High")

    for status in TaskStatus:
        for priority in TaskPriority:
            both = {t.id for t in store.filter_tasks(status=status, priority=priority)}
            by_status = {t.id for t in store.filter_tasks(status=status)}
            by_priority = {t.id for t in store.filter_tasks(priority=priority)}
            assert both <= by_status & by_priority


def test_filter_is_stable_and_pure(store, make_task):
    """L'ordre est conservé et la liste d'entrée n'est pas modifiée"""
    _sample(make_task)
    make_task(title="Jogging du soir", category="Health")
    tasks = store.tasks
    before = list(tasks)

    results = filter_tasks(tasks, category="Health")

    assert [t.title for t in results] == ["Morning jog", "Jogging du soir"]
    assert tasks == before
    assert results is not tasks
    # Appels répétés avec d'autres critères
    assert len(filter_tasks(tasks, search="jog")) == 2
    assert len(filter_tasks(tasks)) == 4

