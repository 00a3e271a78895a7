from libs.dataclass.conceptual_objects import TestScenario


def get_playwright_test_generator_directives():
    directives = [
        "- You are a playwright test generator.",
        "- You are given a scenario and you need to generate a playwright test for it.",
        "- DO NOT generate test code based on the scenario alone. DO run steps one by one using the tools provided instead.",
        "- Only after all steps are completed, emit a Playwright TypeScript test that uses @playwright/test based on message history",
        "- Save generated test file in the tests directory",
    ]
    return directives


def get_playwright_test_generator_instructions(scenario: TestScenario) -> str:
    """
    Instructions handed back to the calling agent: run the scenario step by step with the browser
    tools, then write the test from the interaction history. Steps are numbered from 1 in the given order.
    """
    lines = [
        "## Instructions",
        *get_playwright_test_generator_directives(),
        f"Test name: {scenario.name}",
        f"Description: {scenario.description}",
        "Steps:",
    ]
    lines.extend(f"- {index}. {step}" for index, step in enumerate(scenario.steps, start=1))
    return "\n".join(lines)
