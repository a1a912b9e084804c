"""Canned report generator for service and API tests."""

from __future__ import annotations

from valueadd.errors import GenerationError


SAMPLE_REPORT = """Hello Jane, thank you for sharing your background with us.

Key Commercial Strengths
* Built and led a 40-person commercial team
* Closed three enterprise partnerships

Potential Markets & Sectors to Target
Fintech and insurance are natural next steps.

Ideal Company Profile
- Series B to D scale-ups
- Private equity backed businesses

Where You Can Add Value
Board-level commercial strategy.

Example Outreach Message
"I help growth-stage companies build repeatable revenue."

LinkedIn Profile Feedback
Lead with outcomes in your headline.

Your Potential Impact
Faster revenue growth and stronger governance.

Final Thoughts
We look forward to working with you."""


class FakeReportGenerator:
    def __init__(self, content: str = SAMPLE_REPORT, *, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, str]] = []

    async def generate(self, prompt: str, system_instructions: str) -> str:
        self.calls.append({'prompt': prompt, 'system': system_instructions})
        if self.error is not None:
            raise self.error
        if not self.content:
            raise GenerationError('Language model returned an empty report')
        return self.content
