"""AAPOR Required Disclosure Elements (Transparency Initiative)."""

ANSWER_PLACEHOLDER = "Type your answer here."


def _textarea(qid, label, tooltip="", required=True):
    return {
        "id": qid,
        "label": label,
        "type": "textarea",
        "placeholder": ANSWER_PLACEHOLDER,
        "tooltip": tooltip,
        "required": required,
    }


def _yes_no(qid, label):
    return {"id": qid, "label": label, "type": "radio", "options": ["Yes", "No"], "required": True}


SECTIONS = [
    {
        "id": "first-data-source",
        "title": "First Data Source",
        "summary": "",
        "questions": [
            _textarea(
                "q1",
                "Describe type (e.g. survey, government records, text or other media, etc.) and source of "
                "data (collected by the authors, scraped from the web source such as social media, secondary "
                "data analysis, etc.)",
            ),
        ],
    },
    {
        "id": "data-collection-strategy",
        "title": "Data Collection Strategy",
        "summary": "",
        "questions": [
            _textarea(
                "q2",
                "Describe the data collection strategies employed",
                tooltip="e.g. surveys, focus groups, content analyses",
            ),
        ],
    },
    {
        "id": "research-sponsor-and-conductor",
        "title": "Research Sponsor and Conductor",
        "summary": "",
        "questions": [
            _textarea(
                "q3",
                "Name the sponsor of the research and the party(ies) who conducted it. If the original source "
                "of funding is different than the sponsor, this source will also be disclosed.",
            ),
        ],
    },
    {
        "id": "measurement-tools-instruments",
        "title": "Measurement Tools/Instruments",
        "summary": (
            "Measurement tools include questionnaires with survey questions and response options, show "
            "cards, vignettes, or scripts used to guide discussions or interviews. Content analyses and "
            "ethnographic research will provide the scheme or guide used to categorize the data."
        ),
        "questions": [
            _textarea("q4", "Describe the measurement tools and instruments used in the research."),
        ],
    },
    {
        "id": "population-under-study",
        "title": "Population Under Study",
        "summary": (
            "Researchers will be specific about the decision rules used to define the population when "
            "describing the study population, including location, age, other social or demographic "
            "characteristics, and time."
        ),
        "questions": [
            _textarea("q4", "Describe the population under study."),
        ],
    },
    {
        "id": "methods-used-generate-and-recruit-sample",
        "title": "Methods Used to Generate and Recruit the Sample",
        "summary": (
            "The description of the methods of sampling includes the sample design and methods used to "
            "contact or recruit research participants or collect units of analysis (content analysis)."
        ),
        "questions": [
            _textarea(
                "q5",
                "Explicitly state whether the sample comes from a frame selected using a probability-based "
                "methodology, or if the sample was selected using non-probability methods.",
                tooltip=(
                    "A probability-based methodology means selecting potential participants with a known "
                    "non-zero probability from a known frame. A non-probability method could be potential "
                    "participants from opt-in, volunteer, or other sources."
                ),
            ),
            _textarea(
                "q7",
                "For surveys, focus groups, or other forms of interviews, provide a clear indication of "
                "method(s) by which participants were contacted, selected, recruited, and intercepted, or "
                "otherwise contacted or encountered, along with any eligibility requirements and/or "
                "oversampling.",
            ),
            _textarea("q8", "Describe any use of quotas."),
            _textarea(
                "q9",
                "Include the geographic location of data collection activities for any in-person research.",
            ),
            _textarea(
                "q10",
                "For content analysis, detail the criteria or decision rules used to include or exclude "
                "elements of content and any approaches used to sample content. If a census of the target "
                "population of content was used, that will be explicitly stated.",
            ),
            _textarea(
                "q11",
                "Provide details of any strategies used to help gain cooperation (e.g. advance contact, "
                "letters, scripts, compensation or incentives, refusal conversion contacts).",
            ),
            _textarea(
                "q12",
                "Describe any compensation/incentives provided to research subjects and the method of "
                "delivery (debit card, gift card, cash).",
            ),
        ],
    },
    {
        "id": "methods-and-modes-of-data-collection",
        "title": "Method(s) and Mode(s) of Data Collection",
        "summary": (
            "Include a description of all mode(s) used to contact participants or collect data or "
            "information and the language(s) offered or included."
        ),
        "questions": [
            _textarea(
                "q13",
                "Based on the description above, provide a description of method(s) and mode(s) of data "
                "collection.",
            ),
        ],
    },
    {
        "id": "sample-sizes-and-precision",
        "title": "Sample Sizes",
        "summary": (
            "Sample Sizes (by sampling frame if more than one frame was used) and (if applicable) "
            "discussion of the precision of the results"
        ),
        "questions": [
            _textarea(
                "q15",
                "Provide sample sizes for each mode of data collection (for surveys include sample sizes for "
                "each frame, list, or panel used). For content analyses, provide the number of content units "
                "analyzed and the size of the population from which they were drawn.",
            ),
            _textarea(
                "q16",
                "For probability sample surveys, report estimates of sampling error (often described as the "
                "margin of error) and discuss whether or not the reported sampling error or statistical "
                "analyses have been adjusted for the design effect.",
            ),
            _textarea(
                "q17",
                "Reports of non-probability sample surveys will only provide measures of precision if they "
                "are defined and accompanied by a detailed description of how the underlying model was "
                "specified, its assumptions validated, and the measure(s) calculated.",
            ),
            _textarea(
                "q18",
                "If content was analyzed using human coders, report the number of coders, whether "
                "inter-coder reliability estimates were calculated for any variables, and the resulting "
                "estimates.",
            ),
        ],
    },
    {
        "id": "whether-and-how-data-weighted",
        "title": "Whether and How the Data Were Weighted",
        "summary": "",
        "questions": [
            _textarea(
                "q18",
                "Specify whether the data were weighted. If weights were used, describe how the weights were "
                "calculated, including the variables used and the sources of the weighing parameters.",
            ),
        ],
    },
    {
        "id": "how-the-data-were-processed-procedures",
        "title": "Data Processes and Procedures for Data Quality",
        "summary": "",
        "questions": [
            _textarea(
                "q19",
                "Describe validity checks, where applicable, including attention checks, logic checks, "
                "exclusion of straight-liners or speeders, screening for bots or fabricated profiles, and "
                "any data imputation, exclusions or replacement. State whether coding was done by software "
                "or human coders (or both).",
            ),
        ],
    },
    {
        "id": "panel",
        "title": "Panel Information",
        "summary": "",
        "questions": [
            _yes_no("q20", "Was a panel used?"),
            _textarea(
                "q21",
                "Please describe the procedures for managing the membership, participation, and attrition of "
                "the panel, and if a pool, panel, or access panel was used.",
            ),
        ],
    },
    {
        "id": "interviewer-or-coders",
        "title": "Interviewer or Coders Information",
        "summary": "",
        "questions": [
            _yes_no("q22", "Was an interviewer or coder used?"),
            _textarea(
                "q23",
                "Please provide interviewer details, such as methods of interviewer or coder training and "
                "details of supervision and monitoring of interviewers or human coders. If machine coding "
                "was conducted, include a description of the machine learning involved in the coding.",
            ),
        ],
    },
    {
        "id": "eligibility-screening",
        "title": "Eligibility Screening",
        "summary": "",
        "questions": [
            _yes_no("q24", "Was eligibility screening used?"),
            _textarea(
                "q25",
                "Please provide details about the screening procedures, including any screening for other "
                "surveys or data collection that would have made sample or selected members ineligible for "
                "the current data collection.",
            ),
        ],
    },
    {
        "id": "study-stimuli",
        "title": "Study Stimuli",
        "summary": "",
        "questions": [
            _textarea(
                "q26",
                "Any relevant stimuli, such as visual or sensory exhibits or show cards. In the case of "
                "surveys conducted via self-administered computer-assisted interviewing, providing the "
                "relevant screenshot(s) is strongly encouraged, though not required.",
            ),
        ],
    },
    {
        "id": "dispositions-response-participation-rate",
        "title": "Dispositions, Response, or Participation Rate",
        "summary": "",
        "questions": [
            _textarea(
                "q27",
                "Summaries of the disposition of study-specific sample records so that response rates for "
                "probability samples and participation rates for non-probability samples can be computed. "
                "If dispositions cannot be provided, explain the reason(s) why they cannot be disclosed.",
            ),
        ],
    },
    {
        "id": "sample-sizes",
        "title": "Sample Sizes",
        "summary": "",
        "questions": [
            _textarea(
                "q28",
                "The unweighted sample size(s) on which each estimate or analysis is based and an "
                "explanation of sample sizes (e.g. why cases are dropped from analyses)",
            ),
        ],
    },
    {
        "id": "measurement-model-specification",
        "title": "Measurement and Model Specification",
        "summary": "",
        "questions": [
            _textarea(
                "q29",
                "Specifications adequate for replication of indices or statistical modeling included in "
                "the paper.",
            ),
        ],
    },
    {
        "id": "general-statement",
        "title": "Limitations of the Design and Data Collection",
        "summary": "",
        "questions": [
            _textarea(
                "q30",
                "Please provide a general and brief statement summarizing the limitations of the specific "
                "data collection procedures used.",
            ),
        ],
    },
]

TEMPLATE = {
    "id": "aapor-transparency",
    "name": "AAPOR Required Disclosure Elements",
    "description": "Standard disclosure checklist for AAPOR",
    "sections": SECTIONS,
    "section_groups": [
        {
            "title": "",
            "description": "",
            "section_ids": [section["id"] for section in SECTIONS],
        },
    ],
    "instance_noun": "Data Source",
    "add_instance_label": "+ Add Another Data Source",
    "instructions_heading": "Instructions for AAPOR Required Disclosure Elements:",
    "instructions": [
        "Every article or note must have an Appendix A that provides the AAPOR required disclosure "
        "elements for each data source used.",
        "You can insert a link to an online reference in lieu of a description if it is a study-specific "
        "methodological description and permanently archived. Please indicate if a required element does "
        "not apply to each data source and why.",
        "Insert additional sets of information if your manuscript uses more than one data source using the "
        "\"Add Another Data Source\" button under each section.",
    ],
    "visibility_rules": {
        "q21": ("q20", "Yes"),
        "q23": ("q22", "Yes"),
        "q25": ("q24", "Yes"),
    },
    "numbering_overrides": {},
}
