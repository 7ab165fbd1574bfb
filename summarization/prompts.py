"""
Prompt templates for materials extraction from construction specifications.

Two call types:
1. Chunk extraction: one call per chunk, no knowledge of other chunks
2. Merge: one call combining every chunk result into the final report

A section that fits into a single chunk is sent with the single-shot prompt,
which asks for the final report layout directly.
"""

EXTRACTION_SYSTEM = """You are a construction materials extraction assistant for masonry subcontractors.
You read construction specification text and report the materials and standards it requires.

Rules:
1) Use only information in the provided text. Do not invent products, standards or quantities.
2) Quote standard designations exactly as written (e.g. ASTM C90, ASTM C270 Type S, TMS 602).
3) Flag anything unusual, premium or cost-increasing (special finishes, testing, mockups,
   tight tolerances, proprietary products, schedule constraints).
4) Plain text with headings and bullet points. No preamble."""


CHUNK_EXTRACTION_USER = """This is {label} of a construction specification section.
Treat it on its own: other parts are processed separately and combined later.

Extract:
- Project header details if present (owner/developer, project name, project address)
- Every required material, grouped by category (masonry units, mortar, grout,
  reinforcement, ties/anchors, flashing, drainage, accessories, other)
- The technical standards that apply to each material
- Unusual or premium requirements that affect cost, complexity or schedule

If this part names no materials, say "No materials in this part."

Specification text:
{text}"""


REPORT_LAYOUT = """Structure the report in exactly these three sections, in this order:

1. PROJECT HEADER
   Owner/developer name, project name, project address (only those present in the source).

2. QUICK SUMMARY
   A bid-assessment overview split into:
   - Standard requirements
   - Premium / unusual requirements that affect cost, complexity or schedule

3. FULL DETAILED BREAKDOWN
   Organized by material category (masonry units, mortar, grout, reinforcement,
   ties/anchors, flashing, drainage, accessories, other). For each category list
   the required materials, the required standards, and call out atypical or
   cost-increasing items explicitly."""


SINGLE_SHOT_USER = """This is {label} of a construction specification section: the whole section in one request.
Extract and summarize all materials in it.

{layout}

Specification text:
{text}"""


MERGE_SYSTEM = """You are a construction materials analyst combining partial extraction results
from one specification section into a single report for a masonry bid.

Rules:
1) Use only information in the partial results.
2) Deduplicate: a material or standard mentioned in several portions appears exactly once,
   under its category. Portions overlap, so repeats are expected.
3) Keep standard designations exactly as written.
4) Plain text with headings and bullet points. No preamble."""


MERGE_USER = """The specification section was split into {count} overlapping portions.
Below are the extraction results, one per portion, in document order.

{layout}

Partial results:
{portions}"""


PORTION_HEADER = "=== PORTION {index} OF {total} ==="


def get_chunk_extraction_prompt(text: str, label: str) -> str:
    return CHUNK_EXTRACTION_USER.format(label=label, text=text)


def get_single_shot_prompt(text: str, label: str = "part 1 of 1") -> str:
    return SINGLE_SHOT_USER.format(label=label, layout=REPORT_LAYOUT, text=text)


def get_merge_prompt(portions: str, count: int) -> str:
    return MERGE_USER.format(count=count, layout=REPORT_LAYOUT, portions=portions)
