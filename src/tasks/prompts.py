"""Prompt templates for the per-category task generators."""

from shared_types import TaskCategory
from tasks.context import GitHubContext, TimeContext


class PromptTemplates:
    """One template per category. Each asks for a fenced ```json block."""

    WORK = """You are a professional productivity consultant. Plan today's work reminders from the context below.

TIME CONTEXT:
- Date: {date}
- Weekday: {day_of_week}
- Time of day: {time_of_day}
- Weekend: {weekend}

GITHUB PROJECTS:
{repos}

Cover a mix of: code review and quality checks, milestone tracking, technical debt cleanup,
documentation upkeep, team communication, skill growth, tooling improvements.

Return 3-5 concrete tasks as JSON in this exact shape:

```json
{{
  "summary": "today's focus in one sentence",
  "total_tasks": 4,
  "estimated_total_time": "2-3 hours",
  "tasks": [
    {{
      "title": "Review open pull requests for project X",
      "description": "Check yesterday's PRs for correctness and conventions",
      "priority": "high",
      "estimated_time": "30 min",
      "category": "code review",
      "actionable_steps": ["Open the PR list", "Read the diff", "Leave actionable feedback"]
    }}
  ]
}}
```

Keep every task specific and executable. It is {time_of_day}; size the workload accordingly."""

    LEARNING = """You are a senior technical learning advisor. Plan today's study session from the context below.

TECH STACK: {languages}

CURRENT PROJECTS:
{repos}

TIME CONTEXT:
- Date: {date} ({day_of_week})
- Time of day: {time_of_day}
- Weekend: {weekend}

Balance depth in the current stack, exploration of new technology, system design skills,
hands-on practice, community participation, reading and video material.

Return 3-4 learning tasks as JSON:

```json
{{
  "learning_theme": "today's theme",
  "focus_area": "main area",
  "total_time": "total study time",
  "tasks": [
    {{
      "title": "learning task title",
      "description": "what to study and why",
      "type": "deep dive/new technology/practice project/reading",
      "difficulty": "beginner/intermediate/advanced",
      "priority": "high/medium/low",
      "estimated_time": "estimate",
      "resources": ["recommended resource"],
      "actionable_steps": ["concrete step"]
    }}
  ]
}}
```

{weekend_hint} Make the plan challenging but achievable, with measurable goals."""

    MARKET = """You are a senior technology market analyst. Prepare today's market watch tasks from the context below.

TIME CONTEXT:
- Date: {date} ({day_of_week})
- Time of day: {time_of_day}

TECHNOLOGY FOCUS: {languages}

Cover technology trends, market opportunities, investment signals, industry news, the skills
market, competitor moves and policy impact, with attention to AI/ML, cloud infrastructure and
open source.

Return 3-4 analysis tasks as JSON:

```json
{{
  "market_summary": "today's overview",
  "key_trends": ["trend 1", "trend 2"],
  "analysis_tasks": [
    {{
      "title": "analysis task title",
      "category": "trend/opportunity/investment/industry/skills/competition/policy",
      "description": "what to analyse",
      "research_focus": ["focus point"],
      "information_sources": ["suggested source"],
      "time_requirement": "time needed",
      "priority": "high/medium/low",
      "action_items": ["concrete action"]
    }}
  ],
  "watch_list": ["companies/projects/technologies to follow"],
  "risk_warnings": ["risk"]
}}
```

Keep the suggestions practical and forward-looking."""


_DEFAULT_LANGUAGES = {
    TaskCategory.WORK: "general",
    TaskCategory.LEARNING: "general technology stack",
    TaskCategory.MARKET: "AI, Cloud Computing, Web Development",
}


def _format_repos(github: GitHubContext, limit: int) -> str:
    if not github.repos:
        return "- (no repository context available)"
    lines = []
    for repo in github.repos[:limit]:
        lang = f" ({repo.language})" if repo.language else ""
        lines.append(f"- {repo.name}{lang}: {repo.description or 'no description'}")
    return "\n".join(lines)


def build_prompt(category: str, time_ctx: TimeContext, github: GitHubContext) -> str:
    """Render the prompt for a category. Unknown categories raise ValueError."""
    category = TaskCategory(category)
    template = {
        TaskCategory.WORK: PromptTemplates.WORK,
        TaskCategory.LEARNING: PromptTemplates.LEARNING,
        TaskCategory.MARKET: PromptTemplates.MARKET,
    }[category]

    languages = ", ".join(github.languages) or _DEFAULT_LANGUAGES[category]
    weekend_hint = (
        "It is the weekend: longer deep-dive sessions are fine."
        if time_ctx.is_weekend
        else "It is a workday: keep sessions short and focused."
    )
    return template.format(
        date=time_ctx.date,
        day_of_week=time_ctx.day_of_week,
        time_of_day=time_ctx.time_of_day,
        weekend="yes" if time_ctx.is_weekend else "no",
        weekend_hint=weekend_hint,
        repos=_format_repos(github, limit=10 if category == TaskCategory.WORK else 5),
        languages=languages,
    )
