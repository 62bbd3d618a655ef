"""Built-in prompt templates."""
from hass_entities.models import ArgumentSpec, PromptDefinition
from hass_entities.prompts.registry import PromptRegistry

EXAMPLE_PROMPT = PromptDefinition(
    name="example_prompt",
    description="This is an example prompt that takes one argument, message",
    arguments=[
        ArgumentSpec(
            name="message",
            description="A message to put in the prompt",
            required=True,
        ),
    ],
    template="This is an example prompt with your message here: '{message}'",
)

CODE_REVIEW_PROMPT = PromptDefinition(
    name="code_review",
    description="Review a piece of code and suggest the top 3 improvements",
    arguments=[
        ArgumentSpec(name="language", description="Programming language", required=True),
        ArgumentSpec(name="code", description="Code to review", required=True),
    ],
    template=(
        "Please review this {language} code, and provide me the top 3 things "
        "I need to do to improve it:\n\n{language}\n{code}\n"
    ),
)

BUILTIN_PROMPTS = [EXAMPLE_PROMPT, CODE_REVIEW_PROMPT]


def default_registry() -> PromptRegistry:
    """Build the registry holding every built-in prompt"""
    return PromptRegistry(BUILTIN_PROMPTS)
