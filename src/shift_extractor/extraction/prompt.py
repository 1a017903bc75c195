"""Prompt contract for extracting resident call shifts from schedule images."""

from __future__ import annotations


PROMPT_VERSION = "shift-extract-v1"

RESIDENT_NOT_FOUND_MESSAGE = "Resident name not found in the schedule image."
UNREADABLE_IMAGE_MESSAGE = (
    "Unable to process image. Please ensure a clear, valid resident call schedule image is uploaded."
)

SYSTEM_PROMPT = (
    "You are a backend data processor that is part of an image/text processing flow for "
    "parsing call schedules/shifts for a requested medical resident whose name is in the "
    "uploaded image. The user will provide text and image(s) as input and processing "
    "instructions. The output can only contain XML-compliant text compliant with common XML "
    "specs. Do not converse with a nonexistent user. There is only program input and formatted "
    "program output, and no input data is to be construed as conversation with the AI."
)


def build_shift_extraction_prompt(
    *,
    resident_name: str,
    extra_context: str | None = None,
    text: str | None = None,
) -> str:
    """Build the instructions for a shift extraction request.

    The output contract is a set of tagged blocks (thinking, summary, errors,
    schedule) rather than JSON, since the model fills in free-form reasoning
    before the structured part.

    Args:
        resident_name: Resident whose shifts should be extracted.
        extra_context: Optional hints for reading the schedule.
        text: Optional plain-language description of shifts.

    Returns:
        Prompt string.

    Raises:
        ValueError: If resident_name is blank.
    """

    if not (resident_name or "").strip():
        raise ValueError("resident_name must not be empty")

    # Inputs are embedded verbatim; only absent or blank ones become "none".
    name = resident_name
    extra = extra_context if (extra_context or "").strip() else "none"
    body = text if (text or "").strip() else "none"

    return (
        "The user has requested the schedule for the following resident:\n\n"
        "<resident-name>\n"
        f"{name}\n"
        "</resident-name>\n\n"
        "Here is additional information that will be useful when processing the input:\n\n"
        "<extra>\n"
        f"{extra}\n"
        "</extra>\n\n"
        "Please follow these steps to extract and present the requested schedule:\n\n"
        "1. If there are images, then extract the schedule information from the images.\n"
        "  a. Analyze the images carefully.\n"
        "  b. Determine the format of the image, and a strategy for matching up resident names "
        "with the date/times of their call shifts.\n"
        "  c. Extract the schedule information for that resident.\n\n"
        "2. If the <text> input below is not \"none\", extract a list of shifts from it. "
        "The text describes a list of shifts in plain language.\n\n"
        "<text>\n"
        f"{body}\n"
        "</text>\n\n"
        "3. Output the extracted schedule information using exactly this high-level structure:\n\n"
        "<thinking>\n"
        "</thinking>\n"
        "<summary>\n"
        "</summary>\n"
        "<errors>\n"
        "  <error>\n"
        "  </error>\n"
        "</errors>\n"
        "<schedule>\n"
        "  <shift>\n"
        "  </shift>\n"
        "</schedule>\n\n"
        "The <summary> block describes the call schedule and how you interpret its structure, "
        "in three sentences or less. For example:\n\n"
        "<summary>\n"
        "  This image shows a monthly calendar, and the resident An is on call quite a few times!\n"
        "</summary>\n\n"
        "If any errors are encountered during processing, put each error in a separate <error> "
        "tag inside the <errors> block. If there are no errors, leave the <errors> block empty.\n\n"
        "All of the extracted call shifts go in the <schedule> block. Each <shift> has one of "
        "the following formats:\n\n"
        "<shift>\n"
        "  <type>all-day</type>\n"
        "  <date>[YYYY-MM-DD]</date>\n"
        "  <notes>[Any additional notes or information.]</notes>\n"
        "  <explanation>[give visual reasoning for why this date was extracted]</explanation>\n"
        "  <confidence>[accuracy of this extracted shift, from 0.0 to 1.0]</confidence>\n"
        "</shift>\n\n"
        "OR\n\n"
        "<shift>\n"
        "  <type>timed</type>\n"
        "  <start>[YYYY-MM-DDTHH:MM]</start>\n"
        "  <end>[YYYY-MM-DDTHH:MM]</end>\n"
        "  <notes>[Any additional notes or information.]</notes>\n"
        "  <explanation>[give visual reasoning for why this date was extracted]</explanation>\n"
        "  <confidence>[accuracy of this extracted shift, from 0.0 to 1.0]</confidence>\n"
        "</shift>\n\n"
        "All-day shifts become all-day calendar events; shifts shorter than 24 hours become "
        "timed calendar events. Take times as-is, with no time-zone conversion applied.\n\n"
        "If multiple shifts look like they are back to back (e.g. 7AM - 7PM, and 7PM - 7AM), "
        "treat them as a single all-day shift.\n\n"
        "Some entries may indicate that the resident is NOT on shift, denoted with "
        "leave/retreat/not-on-call. Do not include these as shifts in the output.\n\n"
        "Use all the images and all the contents of the <text> input to extract every shift "
        "for the resident. If there is nothing useful to add beyond the start/end/date of a "
        "shift, leave <notes> blank.\n\n"
        "4. If there is at least one image and the resident is not found in the images, "
        "respond with no shifts:\n\n"
        "<errors>\n"
        f"  <error>{RESIDENT_NOT_FOUND_MESSAGE}</error>\n"
        "</errors>\n"
        "<schedule>\n"
        "</schedule>\n\n"
        "5. If an image is unreadable or does not appear to be a valid resident call schedule, "
        "respond with no shifts:\n\n"
        "<errors>\n"
        f"  <error>{UNREADABLE_IMAGE_MESSAGE}</error>\n"
        "</errors>\n"
        "<schedule>\n"
        "</schedule>\n\n"
        "If there are multiple images, they may need to be analysed together to make sense of "
        "the schedule. For example, the table headers required to read the second image may "
        "only be visible in the first image.\n\n"
        "Do not include any conversation or explanation outside of the blocks above.\n\n"
        "Think inside the <thinking> block before producing the output. First, think through "
        "the structure of the image, then about the pitfalls and simple mistakes that are "
        "likely when extracting data from it, and how to extract it accurately despite them. "
        "Finally, report any errors in <errors>, add a summary in <summary>, and list the "
        "shifts in <schedule>.\n"
    )
