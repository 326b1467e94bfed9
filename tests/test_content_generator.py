"""Tests for content generation and modification."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from content.content_modifier import ContentModifier, ModificationKind, MODIFICATION_GUIDANCE
from content.errors import ContentGenerationError, ContentModificationError, ProviderError, UnknownModelError
from config.settings import settings
from content.generator import ContentGenerator
from content.llm_provider import (
    GeminiProvider,
    MODEL_REGISTRY,
    OpenAIChatProvider,
    get_provider,
    list_models,
)
from content.prompt_templates import (
    EXERCISE_PROMPT,
    GENERIC_PROMPT,
    LESSON_PROMPT,
    PROJECT_PROMPT,
    QUIZ_PROMPT,
    get_prompt_template,
)
from models.schemas import GenerateContentRequest, GenerationOptions


def make_request(**overrides):
    data = {
        'title': 'Python Functions',
        'curriculumId': 1,
        'contentType': 'lesson',
        'difficulty': 'Beginner',
        'duration': '30',
        'objectives': 'Define and call functions',
        'instructions': 'Use simple examples',
    }
    data.update(overrides)
    return GenerateContentRequest(**data)


def prompt_text(messages):
    return "\n".join(m.content for m in messages)


# ===== Template Selection Tests =====

def test_template_per_content_type():
    """Each known type gets its own template; everything else is generic."""
    assert get_prompt_template('lesson') is LESSON_PROMPT
    assert get_prompt_template('quiz') is QUIZ_PROMPT
    assert get_prompt_template('exercise') is EXERCISE_PROMPT
    assert get_prompt_template('Programming Exercise') is EXERCISE_PROMPT
    assert get_prompt_template('project') is PROJECT_PROMPT
    assert get_prompt_template('flashcards') is GENERIC_PROMPT


def test_prompt_embeds_request_fields():
    generator = ContentGenerator(provider_resolver=MagicMock())
    text = prompt_text(generator.build_messages(make_request()))

    assert 'Generate a lesson on Python Functions' in text
    assert 'Difficulty: Beginner' in text
    assert 'Duration: 30 minutes' in text
    assert 'Learning Objectives: Define and call functions' in text
    assert 'Generation Style: comprehensive' in text
    assert 'Format your response in markdown' in text


def test_feature_directives_follow_options():
    generator = ContentGenerator(provider_resolver=MagicMock())
    request = make_request(generationOptions=GenerationOptions(
        includeCode=True,
        includeChecks=True,
        style='concise',
        format='html',
    ))
    text = prompt_text(generator.build_messages(request))

    assert 'Please include code examples.' in text
    assert 'Please include knowledge check questions.' in text
    assert 'visual element descriptions' not in text
    assert 'Generation Style: concise' in text
    assert 'Format your response in html' in text


def test_quiz_prompt_asks_for_marked_answers():
    generator = ContentGenerator(provider_resolver=MagicMock())
    text = prompt_text(generator.build_messages(make_request(contentType='quiz')))

    assert '[CORRECT]' in text
    assert '4-6 questions' in text


# ===== Content Generator Tests =====

@pytest.mark.asyncio
async def test_generate_returns_raw_body(mock_provider, resolver_for):
    """The provider output is returned untouched, tagged with the model id."""
    resolver = resolver_for(mock_provider)
    generator = ContentGenerator(provider_resolver=resolver)

    result = await generator.generate(make_request())

    assert result.body == "# Generated\n\nSome body text."
    assert result.providerModel == settings.DEFAULT_MODEL
    assert result.contentType == 'lesson'
    assert result.title == 'Python Functions'
    resolver.assert_called_once_with(settings.DEFAULT_MODEL)
    mock_provider.complete.assert_awaited_once()


@pytest.mark.asyncio
async def test_generate_uses_requested_model(mock_provider, resolver_for):
    resolver = resolver_for(mock_provider, 'gpt-4o-mini')
    generator = ContentGenerator(provider_resolver=resolver)

    result = await generator.generate(make_request(
        generationOptions=GenerationOptions(model='gpt-4o-mini')
    ))

    resolver.assert_called_once_with('gpt-4o-mini')
    args = mock_provider.complete.await_args.args
    assert args[1] == 'gpt-4o-mini'
    assert result.providerModel == 'gpt-4o-mini'


@pytest.mark.asyncio
async def test_generate_wraps_provider_failure(failing_provider, resolver_for):
    generator = ContentGenerator(provider_resolver=resolver_for(failing_provider))

    with pytest.raises(ContentGenerationError) as exc_info:
        await generator.generate(make_request())

    assert 'Failed to generate content' in str(exc_info.value)
    assert 'quota exceeded' in str(exc_info.value)


@pytest.mark.asyncio
async def test_generate_unknown_model_fails():
    generator = ContentGenerator()

    with pytest.raises(ContentGenerationError) as exc_info:
        await generator.generate(make_request(
            generationOptions=GenerationOptions(model='no-such-model')
        ))

    assert 'Unknown model' in str(exc_info.value)


# ===== Model Registry Tests =====

def test_get_provider_unknown_model():
    with pytest.raises(UnknownModelError):
        get_provider('no-such-model')


def test_list_models_matches_registry():
    models = list_models()

    assert [m['id'] for m in models] == list(MODEL_REGISTRY.keys())
    assert all(m['provider'] in ('gemini', 'openai') for m in models)


# ===== Content Modifier Tests =====

def test_modification_kind_parse():
    assert ModificationKind.parse('Simplify') is ModificationKind.SIMPLIFY
    assert ModificationKind.parse(' expand ') is ModificationKind.EXPAND
    assert ModificationKind.parse('translate') is None


def test_guidance_for_known_and_unknown_kinds():
    modifier = ContentModifier(provider_resolver=MagicMock())

    assert modifier.get_guidance('refine') == MODIFICATION_GUIDANCE[ModificationKind.REFINE]

    combined = modifier.get_guidance('translate')
    assert combined.count('If ') == len(MODIFICATION_GUIDANCE)
    assert 'If regenerate:' in combined


@pytest.mark.asyncio
async def test_modify_sends_original_body_verbatim(mock_provider, resolver_for):
    modifier = ContentModifier(provider_resolver=resolver_for(mock_provider))
    original = "# Loops\n\nA for loop repeats work."

    result = await modifier.modify(original, 'simplify', 'Use shorter sentences')

    messages = mock_provider.complete.await_args.args[0]
    text = prompt_text(messages)
    assert original in text
    assert 'Modification type: simplify.' in text
    assert MODIFICATION_GUIDANCE[ModificationKind.SIMPLIFY] in text
    assert 'Modification instructions: Use shorter sentences' in text

    assert result.newBody == "# Generated\n\nSome body text."
    assert result.originalBody == original
    assert result.modificationType == 'simplify'


@pytest.mark.asyncio
async def test_modify_wraps_provider_failure(failing_provider, resolver_for):
    modifier = ContentModifier(provider_resolver=resolver_for(failing_provider))

    with pytest.raises(ContentModificationError) as exc_info:
        await modifier.modify("body", 'refine', 'tighten')

    assert 'Failed to modify content' in str(exc_info.value)


def test_content_diff_stats():
    modifier = ContentModifier(provider_resolver=MagicMock())

    stats = modifier.calculate_content_diff("one two three four", "one two three four five six")

    assert stats['original_word_count'] == 4
    assert stats['modified_word_count'] == 6
    assert stats['length_change'] == 2
    assert stats['length_change_percent'] == 50.0


def test_content_diff_from_empty():
    modifier = ContentModifier(provider_resolver=MagicMock())

    stats = modifier.calculate_content_diff("", "new text")

    assert stats['length_change_percent'] == 0


# ===== Provider Tests =====

@pytest.mark.asyncio
async def test_gemini_provider_joins_content_parts():
    with patch('content.llm_provider.ChatGoogleGenerativeAI') as mock_llm_cls:
        mock_llm_cls.return_value.ainvoke = AsyncMock(
            return_value=MagicMock(content=[{"text": "Hello "}, "world"])
        )
        provider = GeminiProvider(api_key="test-key")

        text = await provider.complete([HumanMessage(content="hi")], "gemini-1.5-pro", 0.7)

    assert text == "Hello world"


@pytest.mark.asyncio
async def test_gemini_provider_empty_response():
    with patch('content.llm_provider.ChatGoogleGenerativeAI') as mock_llm_cls:
        mock_llm_cls.return_value.ainvoke = AsyncMock(return_value=MagicMock(content=""))
        provider = GeminiProvider(api_key="test-key")

        with pytest.raises(ProviderError):
            await provider.complete([HumanMessage(content="hi")], "gemini-1.5-pro", 0.7)


def test_openai_message_roles():
    assert OpenAIChatProvider._to_chat_message(SystemMessage(content="rules")) == {"role": "system", "content": "rules"}
    assert OpenAIChatProvider._to_chat_message(HumanMessage(content="ask")) == {"role": "user", "content": "ask"}
    assert OpenAIChatProvider._to_chat_message(AIMessage(content="reply")) == {"role": "assistant", "content": "reply"}
