"""Prompt template for the resume-vs-job match call."""

MAX_RESUME_CHARS = 50_000
MAX_JOB_CHARS = 10_000


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def build_match_prompt(resume_text: str, job_description: str) -> str:
    """Ask the model for skills, work history, red flags, summary and a score.

    The key names here are the first spellings the field aliases look for,
    but the extraction core accepts the usual variants too.
    """
    resume = _truncate(resume_text.strip(), MAX_RESUME_CHARS)
    job = _truncate(job_description.strip(), MAX_JOB_CHARS)

    return f"""You are an experienced technical recruiter evaluating a candidate.

Compare the resume against the job description and respond with ONLY valid JSON,
no markdown and no explanation, using exactly this structure:
{{
  "Skills": ["skill 1", "skill 2"],
  "Work History": [
    {{
      "title": "Job title",
      "company": "Company name",
      "location": "City, Country",
      "startDate": "YYYY-MM",
      "endDate": "YYYY-MM or Present",
      "description": "Responsibilities and achievements",
      "durationMonths": 24,
      "isCurrentRole": true
    }}
  ],
  "Red Flags": ["concern 1", "concern 2"],
  "Summary": "2-3 sentence summary of the candidate's fit for this role",
  "matching_score": <integer 0-100>
}}

SCORING:
- 0-20:  No relevant match.
- 20-40: Weak match, major gaps in core requirements.
- 40-60: Moderate match, several important requirements missing.
- 60-80: Strong match with minor gaps.
- 80-100: Meets or exceeds nearly all requirements.

RED FLAGS: employment gaps over 6 months, frequent job changes (under 1 year),
missing must-have requirements, inconsistent dates. Use an empty list if none.

JOB DESCRIPTION:
{job}

RESUME:
{resume}
"""
