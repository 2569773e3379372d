"""Prompt templates and static content libraries.

Placeholders use ``{{NAME}}`` markers so that literal JSON braces inside the
prompts stay untouched.
"""

import re

from case_insight.content.models import ContentType

# =============================================================================
# Firm knowledge base
# =============================================================================

FIRM_KNOWLEDGE_BASE = """# Firm Profile

## Who we are
- Practice focus: construction-project disputes in Beijing and the surrounding region
- Founded in 2015, a team of 300+ lawyers, paralegals and cost engineers
- Clients: small and mid-sized contractors, subcontractors, material suppliers, project owners

## Core practice areas
- Unpaid construction progress payments and final-account settlement
- Validity of construction contracts, subcontracting and "borrowed qualification" arrangements
- Site visas, variation orders and claims for extra work
- Apparent agency disputes involving project managers and site seals
- Enforcement of judgments against developers and general contractors

## Service commitments
- Major case milestones reported to the client within 24 hours
- Fixed, itemised fees with no mid-case surcharges
- Mandatory conflict-of-interest check before every engagement
- Every lawyer covered by professional liability insurance

## Voice and tone
> Plain language first. Explain the law through the client's own situation, never through jargon alone.

- Use concrete numbers, dates and documents from the case
- Never promise outcomes; describe options and the evidence each one needs
- Close with an invitation to a free case assessment
"""

# =============================================================================
# Extraction prompt
# =============================================================================

EXTRACTION_PROMPT = """You are a legal intake analyst for a construction-dispute law practice.
Read the consultation transcript below and extract the client's legal situation.

Return ONE valid JSON object, no markdown fences, with exactly these keys:
{
  "status": "success",
  "legal_concepts": ["<legal term that applies, e.g. apparent agency>"],
  "case_type": "<cause of action, e.g. construction contract dispute>",
  "key_elements": {
    "timeline": "<key dates in order>",
    "dispute_amount": "<amount in dispute>",
    "contract_status": "<whether and how a contract was signed>",
    "payment_status": "<what has been paid and what is owed>"
  },
  "evidence_analysis": {
    "keywords": ["<evidence item, e.g. chat records, voice recording>"],
    "strength": "<one of: strong (direct evidence) | medium (corroborating evidence) | weak (single source / nothing in writing)>",
    "description": "<one or two sentences on the evidence chain>"
  },
  "user_persona": {
    "tags": ["<#persona tag>"],
    "explicit_pain": ["<what the client says hurts>"],
    "implicit_needs": ["<what the client needs but did not say>"]
  },
  "detected_issues": [
    {
      "tag_id": "<short id>",
      "tag_name": "<short pain-point label>",
      "original_text": "<verbatim sentence from the transcript>",
      "confidence": "<High | Medium | Low>"
    }
  ],
  "problem_summary": "<three-sentence case summary>",
  "urgency_level": "<one of: S (urgent) | A (normal) | B (watching)>",
  "marketing_direction": "<long-tail search phrase a prospect like this would use>",
  "recommended_follow_up": "<next step for the intake lawyer>"
}

Quote the client verbatim in "original_text". Do not invent facts that are not in the transcript.

TRANSCRIPT:
{{RAW_TEXT}}
"""

# =============================================================================
# Generation prompts
# =============================================================================

_GENERATION_CONTEXT = """FIRM KNOWLEDGE BASE (all claims about the firm must come from here):
{{FIRM_KB}}

CASE MATERIAL:
- Pain points: {{Issue_Tags}}
- Client quotes: {{Selected_Quotes}}
- Legal concepts: {{Legal_Concepts}}
- Target search direction: {{Marketing_Direction}}

Write in {{Language}}. Use Markdown: # for the title, ## for sections, - for lists, > for quotes.
"""

ARTICLE_PROMPT = (
    """You are the content lead of a law firm's official account.
Write a long-form article (1200-1800 words) for prospective clients facing the pain points below.
Structure: a hook built from a client quote, the legal analysis in plain language,
what evidence to collect now, how the firm handles cases like this, and a closing call to action.

"""
    + _GENERATION_CONTEXT
)

VIDEO_PROMPT = (
    """You are a short-video scriptwriter for a lawyer's channel.
Write a 60-90 second vertical-video script. Open with a three-second hook, then
alternate "## Scene" sections containing the on-screen text and the lawyer's spoken lines.
End with a single clear call to action.

"""
    + _GENERATION_CONTEXT
)

ZHIHU_PROMPT = (
    """You are a practising construction lawyer answering a question on a Q&A platform.
Start by restating the asker's situation as a question title, answer it directly in the first paragraph,
then explain the reasoning, the risks and the practical steps. Write in the first person,
professional but conversational, around 800 words.

"""
    + _GENERATION_CONTEXT
)

GENERATION_PROMPTS: dict[ContentType, str] = {
    ContentType.ARTICLE: ARTICLE_PROMPT,
    ContentType.VIDEO: VIDEO_PROMPT,
    ContentType.ZHIHU: ZHIHU_PROMPT,
}

# =============================================================================
# Preset pain-point library
# =============================================================================

PRESET_PAIN_POINTS: dict[str, list[dict[str, str]]] = {
    "Contract signing & validity": [
        {"tag": "No written contract", "desc": "Work started on a handshake; nothing was signed with the owner."},
        {"tag": "Borrowed qualification", "desc": "The job was done under another company's licence."},
        {"tag": "Illegal subcontracting", "desc": "The general contractor passed the whole job down the chain."},
        {"tag": "Apparent agency", "desc": "The project manager signed, but the company now denies him."},
    ],
    "Site works & visa management": [
        {"tag": "Unsigned visas", "desc": "Extra work was ordered verbally and never signed off."},
        {"tag": "Variation disputes", "desc": "Design changes ballooned the cost and nobody agrees who pays."},
        {"tag": "Delay penalties", "desc": "The owner blames the contractor for delays it caused itself."},
    ],
    "Payment & settlement": [
        {"tag": "Progress payments withheld", "desc": "Monthly payments stopped halfway through the job."},
        {"tag": "Final account refused", "desc": "The owner will not sign the final settlement."},
        {"tag": "Migrant wage pressure", "desc": "Workers are demanding wages the contractor was never paid."},
        {"tag": "Payment in kind", "desc": "The developer offers apartments instead of cash."},
    ],
    "Litigation & enforcement": [
        {"tag": "Priority of payment claim", "desc": "Whether the contractor ranks ahead of the developer's banks."},
        {"tag": "Judgment not enforced", "desc": "The case was won but the debtor has no assets on record."},
        {"tag": "Limitation period", "desc": "The debt is years old and the client fears it has expired."},
    ],
}

# =============================================================================
# Scenario library seed data
# =============================================================================

ID_PREFIX_MAP: dict[str, str] = {
    "CON": "Contract",
    "SITE": "Site",
    "PAY": "Payment",
    "LIT": "Litigation",
    "CASE": "Case",
}

INITIAL_LEGAL_SCENARIOS: list[dict] = [
    {
        "id": "CON-01",
        "pain_point": "Project manager signed, company denies the contract",
        "triggers": [
            "The contract was signed by their project manager but the company says he had no authority.",
            "They used the project seal, is that even valid?",
        ],
        "ai_logic": "Apparent agency: the contractor reasonably relied on the manager's authority and the site seal.",
        "follow_up": "Collect the signed documents, seal impressions and any payments made by the company.",
        "marketing_action": "Article on when a project manager's signature binds the company.",
    },
    {
        "id": "SITE-01",
        "pain_point": "Extra work ordered verbally, no signed visa",
        "triggers": [
            "The owner's engineer told us on WeChat to add the extra floor slab.",
            "Nobody signed the visa but we did the work.",
        ],
        "ai_logic": "Chat records plus site photos can prove the instruction even without a signed visa.",
        "follow_up": "Export the full chat history and match it against the construction log.",
        "marketing_action": "Short video: three ways to prove extra work without a signed visa.",
    },
    {
        "id": "PAY-01",
        "pain_point": "Final account refused by the owner",
        "triggers": [
            "The building was handed over a year ago and they still will not settle the final account.",
        ],
        "ai_logic": "A deemed-acceptance clause or a cost appraisal can establish the contract price.",
        "follow_up": "Check the contract for a deemed-acceptance clause and the handover date.",
        "marketing_action": "Q&A answer on what to do when the owner will not sign the final account.",
    },
    {
        "id": "LIT-01",
        "pain_point": "Won the case but cannot collect",
        "triggers": [
            "We have the judgment but the developer says it has no money.",
        ],
        "ai_logic": "Priority of the construction price claim over the unsold units; asset investigation.",
        "follow_up": "Apply for an asset search and identify unsold units of the project.",
        "marketing_action": "Article on using the priority payment right against unsold units.",
    },
]


_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def build_extraction_prompt(transcript: str) -> str:
    """Inject the transcript into the extraction prompt."""
    return EXTRACTION_PROMPT.replace("{{RAW_TEXT}}", transcript)


def build_generation_prompt(
    content_type: ContentType,
    issue_tags: list[str],
    quotes: list[str],
    legal_concepts: list[str],
    marketing_direction: str | None,
    *,
    knowledge_base: str = FIRM_KNOWLEDGE_BASE,
    default_marketing_direction: str = "Beijing construction-dispute legal solutions",
    language: str = "Simplified Chinese",
) -> str:
    """Fill a generation prompt for the given content type.

    Every placeholder is filled in one pass, so the knowledge base and case
    text are inserted verbatim.

    Args:
        content_type: Which kind of copy to write.
        issue_tags: Selected pain-point labels.
        quotes: Selected verbatim client sentences.
        legal_concepts: Legal terms from the extraction.
        marketing_direction: Suggested search direction, if any.
        knowledge_base: Firm knowledge base Markdown.
        default_marketing_direction: Fallback when no direction was suggested.
        language: Output language.

    Returns:
        The complete prompt text.
    """
    values = {
        "FIRM_KB": knowledge_base,
        "Language": language,
        "Marketing_Direction": marketing_direction or default_marketing_direction,
        "Legal_Concepts": ", ".join(legal_concepts),
        "Selected_Quotes": "; ".join(quotes),
        "Issue_Tags": ", ".join(issue_tags),
    }
    # Single pass: inserted text is never scanned for placeholders again.
    template = GENERATION_PROMPTS[content_type]
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)
