import pytest

from learning_assistant.catalog import plan_templates
from learning_assistant.services import plan_service


def _result(score, gaps, topic="python", user_id="42"):
    return {
        "userId": user_id,
        "quizId": "python-beginner-1",
        "quizTitle": "Python Fundamentals Assessment",
        "topic": topic,
        "score": score,
        "knowledgeGaps": gaps,
    }


def test_beginner_plan_adds_default_categories():
    plan = plan_service.assemble_plan_from_assessment(
        _result(30, [{"topic": "variables", "questionIds": ["py-b-1"]}])
    )

    assert plan["id"].startswith("lp-42-")
    assert plan["skillLevel"] == "beginner"
    assert [topic["name"] for topic in plan["topics"]] == ["Python Basics", "Python Data Structures"]
    for topic in plan["topics"]:
        assert len(topic["resources"]) == 3
        assert all(r["difficulty"] == "beginner" for r in topic["resources"])
        assert topic["progress"] == 0 and topic["completed"] is False
    assert plan["estimatedTotalTime"] == sum(
        r["estimatedTime"] for topic in plan["topics"] for r in topic["resources"]
    )
    assert plan["progress"] == 0
    assert plan["assessmentId"] == "python-beginner-1"


def test_advanced_plan_keeps_five_resources_per_topic():
    plan = plan_service.assemble_plan_from_assessment(_result(80, []))

    assert plan["skillLevel"] == "advanced"
    sizes = [len(topic["resources"]) for topic in plan["topics"]]
    assert sizes == [5, 5]


def test_intermediate_plan_excludes_advanced_resources():
    plan = plan_service.assemble_plan_from_assessment(
        _result(60, [{"topic": "oop", "questionIds": ["py-i-5"]}, {"topic": "functions", "questionIds": ["py-b-8"]}])
    )

    assert [topic["name"] for topic in plan["topics"]] == ["Python Oop", "Python Functions"]
    difficulties = {r["difficulty"] for topic in plan["topics"] for r in topic["resources"]}
    assert difficulties <= {"beginner", "intermediate"}
    assert all(len(topic["resources"]) <= 3 for topic in plan["topics"])


def test_topic_is_normalized_but_title_keeps_label():
    plan = plan_service.assemble_plan_from_assessment(_result(50, [], topic=" Python "))
    assert plan["topic"] == "python"
    assert plan["title"] == "Python Learning Plan"
    assert "Python Fundamentals Assessment" in plan["description"]


def test_guest_plan_id():
    plan = plan_service.assemble_plan_from_assessment(_result(50, [], user_id=None))
    assert plan["userId"] == "guest-user"
    assert plan["id"].startswith("lp-guest-user-")


@pytest.mark.parametrize(
    "question,key,prefix",
    [
        ("I am new to React, where do I start?", "react", "Beginner's Guide to "),
        ("Advanced data science with pandas", "data-science", "Advanced "),
        ("Teach me python", "python", ""),
    ],
)
def test_plan_from_question(question, key, prefix):
    plan = plan_service.plan_from_question(question)
    template = plan_templates.get_template(key)

    assert plan["topic"] == key
    assert plan["title"] == f"{prefix}{template['title']}"
    assert plan["description"].startswith(f'Learning plan for: "{question}"')
    assert plan["steps"] == template["steps"]


def test_toggle_resource_updates_progress_without_mutating_input():
    plan = plan_service.assemble_plan_from_assessment(_result(30, []))
    resource_id = plan["topics"][0]["resources"][0]["id"]

    updated = plan_service.toggle_resource(plan, 0, resource_id)

    assert plan["topics"][0]["resources"][0].get("completed") is not True
    assert updated["topics"][0]["resources"][0]["completed"] is True
    assert updated["topics"][0]["progress"] == 33
    # (33 + 0) / 2 = 16.5
    assert updated["progress"] == 17

    reverted = plan_service.toggle_resource(updated, 0, resource_id)
    assert reverted["topics"][0]["progress"] == 0
    assert reverted["progress"] == 0


def test_toggle_resource_completes_topic():
    plan = plan_service.assemble_plan_from_assessment(_result(30, []))
    for resource in plan["topics"][1]["resources"]:
        plan = plan_service.toggle_resource(plan, 1, resource["id"])

    assert plan["topics"][1]["completed"] is True
    assert plan["topics"][1]["progress"] == 100
    assert plan["progress"] == 50


def test_toggle_resource_on_nested_plan():
    built = plan_service.build_study_plan("python", "beginner", None)
    resource_id = built["plan"]["topics"][0]["resources"][0]["id"]

    updated = plan_service.toggle_resource(built, 0, resource_id)

    assert updated["plan"]["topics"][0]["resources"][0]["completed"] is True
    assert plan_service.plan_resource_stats(updated)["completed"] == 1


def test_toggle_resource_errors():
    plan = plan_service.assemble_plan_from_assessment(_result(30, []))
    with pytest.raises(plan_service.PlanUpdateError, match="topic_not_found"):
        plan_service.toggle_resource(plan, 9, "py-basics-1")
    with pytest.raises(plan_service.PlanUpdateError, match="resource_not_found"):
        plan_service.toggle_resource(plan, 0, "missing")


def test_build_study_plan_from_catalog(monkeypatch):
    monkeypatch.setattr(plan_service, "generate_text_with_gpt", lambda prompt: None)

    built = plan_service.build_study_plan("Python", "Intermediate", "get a job")

    assert built["source"] == "catalog"
    assert built["currentLevel"] == "intermediate"
    assert built["goals"] == "get a job"
    plan = built["plan"]
    assert plan["topic"] == "python"
    assert plan["title"] == "Python Learning Plan"
    assert [topic["name"] for topic in plan["topics"]][0] == "Python Basics"
    assert all(
        r["difficulty"] != "advanced" for topic in plan["topics"] for r in topic["resources"]
    )
    assert plan["estimatedTotalTime"] > 0


def test_build_study_plan_with_llm(monkeypatch):
    prompts = []

    def fake_generate(prompt):
        prompts.append(prompt)
        return "Week 1: basics"

    monkeypatch.setattr(plan_service, "generate_text_with_gpt", fake_generate)

    built = plan_service.build_study_plan("javascript", "beginner", None)

    assert built["source"] == "ai"
    assert built["plan"]["text"] == "Week 1: basics"
    assert [topic["name"] for topic in built["plan"]["topics"]] == [
        "Javascript Basics",
        "Javascript Arrays",
        "Javascript Async",
    ]
    assert "javascript" in prompts[0]


def test_build_study_plan_rejects_unknown_level():
    with pytest.raises(ValueError):
        plan_service.build_study_plan("python", "wizard", None)


def test_plan_resource_stats_counts_completed_minutes():
    plan = plan_service.assemble_plan_from_assessment(_result(30, []))
    first = plan["topics"][0]["resources"][0]
    plan = plan_service.toggle_resource(plan, 0, first["id"])

    stats = plan_service.plan_resource_stats(plan)
    assert stats == {"total": 6, "completed": 1, "minutes": first["estimatedTime"]}
