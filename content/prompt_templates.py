"""Prompt templates for content generation, modification and discovery using LangChain."""

from langchain_core.prompts import ChatPromptTemplate


# Request block shared by every generation template
GENERATION_REQUEST = """Generate a {content_type} on {title} with the following details:
- Difficulty: {difficulty}
- Duration: {duration} minutes
- Learning Objectives: {objectives}
- Additional Instructions: {instructions}

Generation Style: {style}
{feature_directives}"""


# Lesson Generation Template
LESSON_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an expert educational content creator specializing in creating high-quality lessons.

Create a comprehensive and engaging lesson that helps learners understand the topic deeply.
Include clear explanations, examples, and key points.

Your lesson should follow this structure:
1. Clear introduction that explains what the lesson will cover
2. Main content sections with theoretical concepts explained simply
3. Practical examples that demonstrate the concepts
4. Summary of key points

Format your response in {format} with appropriate headings, lists, and code blocks if applicable."""),

    ("human", GENERATION_REQUEST)
])


# Quiz Generation Template
QUIZ_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an expert educational assessment designer specializing in creating effective multiple-choice quizzes.

Create engaging multiple-choice questions that assess understanding of the topic. For each question:
1. Write a clear question statement
2. Provide exactly 4 options labeled A, B, C, and D
3. Include a variety of question types (recall, application, analysis)
4. Mark the single correct answer for each question with [CORRECT] at the end of the option

Format the output as follows:

# [Quiz Title]

## Question 1
[Question text]
A. [Option A]
B. [Option B]
C. [Option C] [CORRECT]
D. [Option D]

## Question 2
...and so on.

Include 4-6 questions total.
Format your response in {format}."""),

    ("human", GENERATION_REQUEST)
])


# Programming Exercise Template
EXERCISE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an expert educational content creator specializing in creating programming exercises.

Design coding problems that help learners apply concepts and develop programming skills. Your response should include:

1. Problem description with clear requirements
2. Skeleton code with subtasks commented in the code to guide the learner
3. Sample solution code that shows the completed implementation
4. Test cases with inputs and expected outputs

For each exercise, follow this format:

# [Exercise Title]

## Problem Description
[Detailed description of the problem and what the learner needs to accomplish]

## Skeleton Code
```python
# TODO: Implement [specific functionality]
# Subtask 1: [description]
# Subtask 2: [description]
```

## Solution
```python
# Complete solution implementation
```

## Test Cases
[Examples of inputs and expected outputs to verify correctness]

Create 2-3 exercises of varying difficulty.
Format your response in {format}."""),

    ("human", GENERATION_REQUEST)
])


# Notebook Project Template
PROJECT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an expert educational project designer specializing in creating data science projects in Jupyter notebook format.

Design a comprehensive project that allows learners to apply multiple skills related to the topic.
Your response should be structured as follows:

# [Project Title]

## Project Overview
[Brief description of the project and its learning goals]

## Dataset Description
[Description of the dataset(s) to be used, including features, size, and source]

## Implementation Details

### Cell 1: Import Libraries
```python
import pandas as pd
import numpy as np
```

### Cell 2: Data Loading
```python
# Code for loading the dataset
```

[Continue with additional cells for exploration, preprocessing, modeling and evaluation]

## Project Deliverables
[What the learner should submit upon completion]

## Evaluation Criteria
[How the project will be assessed]

Create the project as if it were an actual notebook, alternating markdown cells with instructions
and code cells with executable code.
Format your response in {format}."""),

    ("human", GENERATION_REQUEST)
])


# Fallback for content types without a dedicated template
GENERIC_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an expert educational content creator. Create high-quality educational content
that helps learners understand and apply concepts effectively.

Format your response in {format} with appropriate sections, examples, and clear explanations."""),

    ("human", GENERATION_REQUEST)
])


# Content Modification Template
MODIFICATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an expert educational content editor. You'll be modifying existing content with a specific approach.

Modification type: {modification_type}.

{modification_guidance}

Maintain the original format and structure unless explicitly directed otherwise."""),

    ("human", """Here is the content to modify:

{original_content}

Modification instructions: {instructions}""")
])


# Retrieval-augmented discovery template
RAG_DISCOVERY_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an AI educational content discovery assistant specialized in creating learning pathways and curricula."""),

    ("human", """USER QUERY: {query}

RETRIEVED CONTEXT DOCUMENTS:
{document_context}

Based on the user query and the retrieved documents, perform the following:
1. Analyze the user's intent and learning goals
2. Extract relevant concepts and topics from the retrieved documents
3. Formulate a structured curriculum that addresses the user's needs
4. Include specific modules: lessons, quizzes, exercises, and projects

Format your response as a JSON object with:
1. An "analysis" field containing your understanding of user needs
2. A "curriculumStructure" field with your recommendation
3. A "thoughts" array containing exactly 4 key stages of your reasoning process

The thoughts should represent your step-by-step reasoning process starting with understanding the
query and ending with finalizing the recommendation.

```json
{{
  "analysis": "...",
  "curriculumStructure": {{"title": "...", "description": "...", "modules": []}},
  "thoughts": ["...", "...", "...", "..."]
}}
```""")
])


# Query intent analysis template
QUERY_ANALYSIS_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an AI educational content discovery assistant. Analyze the user's query to
understand their educational content needs."""),

    ("human", "{query}")
])


def get_prompt_template(content_type: str) -> ChatPromptTemplate:
    """
    Get the generation template for a content type.

    Args:
        content_type: Type of content (lesson, quiz, exercise, project)

    Returns:
        ChatPromptTemplate for the content type, or the generic template
    """
    templates = {
        'lesson': LESSON_PROMPT,
        'quiz': QUIZ_PROMPT,
        'exercise': EXERCISE_PROMPT,
        'programming exercise': EXERCISE_PROMPT,
        'project': PROJECT_PROMPT,
    }

    return templates.get(content_type.strip().lower(), GENERIC_PROMPT)
