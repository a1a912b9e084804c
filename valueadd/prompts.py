from __future__ import annotations

from typing import Sequence


SYSTEM_PROMPT_TEMPLATE = """You are a professional business analyst creating value-add reports for {brand} clients.

Your reports should be insightful, actionable, and tailored to the individual's professional background.
Use a warm, professional tone and include specific, actionable insights.

Format the report with clear section headers and bullet points for key information.
Ensure the content feels personalized and targeted to the individual's career trajectory."""


USER_PROMPT_TEMPLATE = """Generate a value-add report for {name} with email {email}{profile_clause}.

The report should start with a personalized introduction addressing the client by name.

Include these exact sections in this order:
{numbered_sections}

For each section:
- Use the exact section title as listed above
- Provide 3-5 bullet points of specific insights where appropriate
- Keep content concise but high-value
- Include industry-specific terminology and insights
- Focus on actionable guidance

Total length should be 1000-1500 words."""


def build_system_prompt(brand: str = 'GetBoardwise') -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(brand=brand)


def _truncate(text: str, limit: int) -> str:
    value = str(text or '').strip()
    if limit > 0 and len(value) > limit:
        return value[:limit].rstrip() + '\n[resume truncated]'
    return value


def build_user_prompt(
    *,
    name: str,
    email: str,
    section_titles: Sequence[str],
    linkedin_url: str | None = None,
    resume_text: str | None = None,
    skills: Sequence[str] | None = None,
    max_resume_chars: int = 20000,
) -> str:
    profile_clause = ''
    if linkedin_url:
        profile_clause = f' and LinkedIn profile {linkedin_url}'

    prompt = USER_PROMPT_TEMPLATE.format(
        name=name,
        email=email,
        profile_clause=profile_clause,
        numbered_sections='\n'.join(f'{i}. {title}' for i, title in enumerate(section_titles, start=1)),
    )

    resume = _truncate(resume_text or '', max_resume_chars)
    if resume:
        prompt += f'\n\nBase the report on the following resume:\n"""\n{resume}\n"""'
    if skills:
        prompt += '\n\nSkills detected in the resume: ' + ', '.join(skills)
    return prompt
