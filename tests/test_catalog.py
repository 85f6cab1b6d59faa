from learning_assistant.catalog import knowledge_base, learning_resources, plan_templates, quiz_bank
from learning_assistant.catalog.levels import Difficulty, format_topic_name


def test_quiz_bank_sizes():
    assert len(quiz_bank.get_topic_questions("python")) == 16
    assert len(quiz_bank.get_topic_questions("javascript")) == 12


def test_every_correct_answer_is_an_option():
    for topic in quiz_bank.available_topics():
        for question in quiz_bank.get_topic_questions(topic):
            assert len(question["options"]) == 4
            assert question["correctAnswer"] in question["options"]


def test_unknown_topic_falls_back_to_python():
    assert quiz_bank.get_topic_questions("Rust") == quiz_bank.get_topic_questions("python")
    assert quiz_bank.get_topic_questions("  JavaScript ")[0]["id"] == "js-b-1"


def test_candidate_questions_are_deterministic():
    first = quiz_bank.candidate_questions("python", Difficulty.INTERMEDIATE, 5)
    second = quiz_bank.candidate_questions("python", Difficulty.INTERMEDIATE, 5)
    assert first == second
    assert [q["id"] for q in first] == ["py-i-1", "py-i-2", "py-i-3", "py-i-4", "py-i-5"]


def test_candidate_questions_append_easier_levels_when_short():
    candidates = quiz_bank.candidate_questions("python", Difficulty.ADVANCED, 5)
    ids = [q["id"] for q in candidates]
    assert ids[:3] == ["py-a-1", "py-a-2", "py-a-3"]
    assert len(ids) == 16
    assert all(not qid.startswith("py-a") for qid in ids[3:])


def test_catalog_returns_copies():
    questions = quiz_bank.get_topic_questions("python")
    questions[0]["question"] = "changed"
    assert quiz_bank.get_topic_questions("python")[0]["question"] != "changed"

    resources = learning_resources.get_category_resources("python-basics")
    resources.clear()
    assert len(learning_resources.get_category_resources("python-basics")) == 5


def test_resource_category_sizes():
    expected = {
        "python-basics": 5,
        "python-data-structures": 5,
        "python-functions": 4,
        "python-oop": 4,
        "python-modules": 2,
        "javascript-basics": 3,
        "javascript-arrays": 2,
        "javascript-async": 3,
    }
    assert {name: len(items) for name, items in learning_resources.LEARNING_RESOURCES.items()} == expected


def test_every_quiz_question_maps_to_resources():
    for topic in quiz_bank.available_topics():
        for question in quiz_bank.get_topic_questions(topic):
            assert learning_resources.categories_for_question(question["id"])


def test_template_keyword_order():
    assert plan_templates.select_template_key("How do I learn JS?") == "javascript"
    assert plan_templates.select_template_key("react hooks") == "react"
    assert plan_templates.select_template_key("HTML and CSS layout") == "web-development"
    assert plan_templates.select_template_key("intro to machine learning") == "data-science"
    assert plan_templates.select_template_key("anything else") == "python"


def test_templates_have_four_steps_of_three_resources():
    for key in plan_templates.available_templates():
        template = plan_templates.get_template(key)
        assert len(template["steps"]) == 4
        assert all(len(step["resources"]) == 3 for step in template["steps"])
        assert len(template["additionalResources"]) == 3


def test_knowledge_base_sizes_and_fallback():
    assert len(knowledge_base.get_documents("python")) == 9
    assert len(knowledge_base.get_documents("javascript")) == 8
    assert knowledge_base.get_documents("go") == knowledge_base.get_documents("python")
    assert knowledge_base.get_introduction("javascript").title == "JavaScript Introduction"


def test_format_topic_name():
    assert format_topic_name("python-data-structures") == "Python Data Structures"
