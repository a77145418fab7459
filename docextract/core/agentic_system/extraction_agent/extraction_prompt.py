"""
Extraction agent prompts.

Prompt templates for every turn of the extraction conversation and for the
consolidation pass.

Dependencies: json, docextract.models
System role: Prompt templates for extraction behavior
"""

import json
import textwrap

from docextract.models.extraction import ExtractedRecord, ExtractionOptions

EXTRACTION_PROMPT = textwrap.dedent(
    """\
    You are a task extraction assistant that analyzes PDFs to identify tasks.

    {technician_context}
    {group_context}
    {category_context}

    Please analyze the attached PDF document and extract tasks that need to be done.

    For each task, extract:

    1. Title - A clear, concise title that summarizes the task
    2. Details - A detailed explanation of what the task involves, formatted as HTML with proper paragraphs, lists, and basic formatting
    3. Assignee - The person assigned to the task (from the available technicians if mentioned)
    4. Group - The group responsible for the task (from the available groups if mentioned)
    5. Category - The most appropriate category for the task (from the available categories)
    6. Due date - Preferred in YYYY-MM-DD format if mentioned, otherwise null
    7. Priority - Low, Medium, High, or Critical based on urgency mentioned
    8. Ticket number - If mentioned in the document
    9. External URL - If mentioned in the document

    Extract as many tasks as you can find in the document. If information isn't available for certain fields, set them to null.

    Format your response as valid JSON in this structure:
    {{
      "tasks": [
        {{
          "title": "Task title",
          "details": "<p>Task details as HTML</p>",
          "assignee": "Name of assignee or null",
          "group": "Group name or null",
          "category": "Category value or null",
          "dueDate": "YYYY-MM-DD or null",
          "priority": "Low|Medium|High|Critical",
          "ticketNumber": "Ticket number or null",
          "externalUrl": "URL or null"
        }}
      ]
    }}
    """
)

CONTINUATION_PROMPT = (
    "Please continue. It seems your response was cut off. "
    "Complete the JSON output of the tasks you were extracting."
)

WRAP_UP_PROMPT = (
    "Please ensure your response is complete and properly formatted as JSON. "
    "If you're done, please state 'EXTRACTION COMPLETE'."
)

REASONING_PROMPT = (
    "Can you explain your analysis process? What tasks did you identify and why? "
    "What were the key parts of the document that led to your task extraction decisions?"
)

CONSOLIDATION_PROMPT = textwrap.dedent(
    """\
    I need you to optimize this list of tasks by removing duplicates and consolidating related items.

    Here's the list of tasks extracted from a document:
    {tasks_json}

    Please:
    1. Go through these tasks carefully
    2. Remove duplicate tasks
    3. Combine and merge related tasks when possible
    4. Account for typos in the original transcript when deciding if tasks are similar
    5. Ensure each final task is comprehensive and clear

    Return ONLY the optimized JSON array of tasks with the same structure as the input.
    Do not include any explanation or additional text.
    """
)


def _candidate_line(label: str, values: list[str]) -> str:
    if not values:
        return f"No {label} specified."
    return f"Available {label}: {', '.join(values)}."


def build_extraction_prompt(options: ExtractionOptions) -> str:
    """
    Render the first-turn prompt with the candidate context lines.

    Args:
        options: Candidate technicians, groups and categories

    Returns:
        str: Prompt text sent alongside the document
    """
    return EXTRACTION_PROMPT.format(
        technician_context=_candidate_line("technicians", options.technicians),
        group_context=_candidate_line("groups", options.groups),
        category_context=_candidate_line("categories", options.categories),
    )


def build_consolidation_prompt(records: list[ExtractedRecord]) -> str:
    """Render the consolidation prompt for a record list."""
    tasks_json = json.dumps([record.to_wire() for record in records], indent=2)
    return CONSOLIDATION_PROMPT.format(tasks_json=tasks_json)
