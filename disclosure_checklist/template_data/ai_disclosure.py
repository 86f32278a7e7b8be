"""AAPOR AI Disclosure Checklist: sections, groups and display metadata."""

ANSWER_PLACEHOLDER = "Type your answer here."

SECTIONS = [
    {
        "id": "tasks-performed",
        "title": "Tasks Performed by AI",
        "summary": (
            "Documenting what the AI did and why it was used is essential because different tasks "
            "introduce different risks. For example, if AI generated survey questions, bias could enter "
            "through wording choices influenced by training data. If AI cleaned data, errors might arise "
            "from misclassification or assumptions embedded in algorithms. Knowing the task helps readers "
            "assess where automation might affect validity."
        ),
        "questions": [
            {
                "id": "q1",
                "label": "How was the AI tool used?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "Was AI used as a colleague helping to write the survey instrument, as an interviewer "
                    "asking questions or even adding questions in response to answer, as a respondent "
                    "simulating the target population, as an analyst cleaning or labelling or modelling the "
                    "raw data, as briefer helping to create the report or other deliverable, or did AI work "
                    "through multiple tasks?"
                ),
                "required": True,
            },
            {
                "id": "q2",
                "label": "Briefly describe what the AI did.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "e.g., A voice-enabled AI chatbot administered the survey, adapting follow-up questions "
                    "based on prior responses, while maintaining neutrality and standardized delivery."
                ),
                "required": True,
            },
        ],
    },
    {
        "id": "human-oversight",
        "title": "Human Oversight or Validation",
        "summary": (
            "Human review is a critical safeguard against AI-driven errors. Disclosing when and how "
            "oversight occurred shows whether potential mistakes, such as misinterpretation of responses "
            "or biased coding, were caught. Enhanced details (e.g., double-blind checks or statistical "
            "validation) indicate the rigor of error control. Without this, consumers cannot judge whether "
            "AI outputs were trusted blindly or verified systematically."
        ),
        "questions": [
            {
                "id": "q3",
                "label": "For which task(s) was AI output reviewed or validated by researchers?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "e.g., research design, generating responses, interviewing/assisting in interviewing, "
                    "cleaning data, producing estimates, coding/labeling data, creating report"
                ),
                "required": True,
            },
            {
                "id": "q4",
                "label": "How was oversight conducted?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "e.g., manual review by two researchers, statistical checks, cross-validation with "
                    "human-coded data"
                ),
                "required": True,
            },
        ],
    },
    {
        "id": "model-details",
        "title": "Model Details",
        "summary": (
            "The model's identity, version, and fine-tuning status matter because different models have "
            "different capabilities and biases. Proprietary models may lack transparency about training "
            "data, while open-source models might allow scrutiny. Custom configurations like temperature "
            "affect creativity and precision, influencing question phrasing or response generation."
        ),
        "questions": [
            {
                "id": "q5",
                "label": "What specific AI system was used?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": "e.g. GPT-4.0, GPT-5, etc",
                "required": True,
            },
            {
                "id": "q6",
                "label": "Was the AI open source (publicly available) or proprietary (owned by a company)?",
                "type": "radio",
                "options": ["Open Source", "Proprietary", "Mixed/Hybrid"],
                "required": True,
            },
            {
                "id": "q7",
                "label": "When was the AI model used for the task?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": "e.g. November 18, 2025",
                "required": True,
            },
            {
                "id": "q8",
                "label": (
                    "Was the model fine-tuned (i.e. adjusting the AI to specialize in a certain task) for "
                    "survey-related work?"
                ),
                "type": "radio",
                "options": ["Yes", "No"],
                "required": True,
            },
            {
                "id": "q9",
                "label": (
                    "For finetuning, what data was used, and from what source(s)? If possible, please "
                    "provide the link to access the data (e.g. Hugging Face dataset link), or cite the "
                    "data's source."
                ),
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": True,
            },
            {
                "id": "q10",
                "label": "Provide the link to the official model documentation.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": True,
            },
            {
                "id": "q11",
                "label": "If and how RAG was used to ground information, and if so, what documents were used.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "e.g. RAG-powered the chatbot administering the survey, by using a catalog of approved "
                    "questions"
                ),
                "required": True,
            },
            {
                "id": "q12",
                "label": (
                    "Custom Configuration Settings: Temperature, max tokens, seed, number of runs, or other "
                    "variation off of the default settings."
                ),
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "Temperature controls creativity: lower = more precise, higher = more creative. Max "
                    "tokens is the maximum length of AI output. Seed is a number that makes results "
                    "reproducible. Sample answer: temperature = 0.7, max tokens = 2,000, seed = 42, "
                    "number of runs = 3"
                ),
                "required": True,
            },
        ],
    },
    {
        "id": "access-tooling-details",
        "title": "Access/Tooling Details",
        "summary": (
            "How the AI was accessed (API vs. embedded tool) and the interface used can affect consistency "
            "and control. Understanding the tooling context helps identify sources of error related to "
            "interaction design or technical constraints."
        ),
        "questions": [
            {
                "id": "q13",
                "label": "How was the model accessed?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": "e.g. API, website, embedded in a platform",
                "required": True,
            },
            {
                "id": "q14",
                "label": "Where and how was the AI embedded or interacted with (if applicable)?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": "e.g. Qualtrics integration, custom dashboard, interviewer bot",
                "required": True,
            },
        ],
    },
    {
        "id": "core-prompts",
        "title": "Core Prompts or Instructions",
        "summary": (
            "Prompts shape AI behavior. If instructions were vague or biased, outputs may reflect those "
            "biases. Exact prompts and system-wide instructions allow others to evaluate whether wording "
            "or framing introduced systematic error."
        ),
        "questions": [
            {
                "id": "q15",
                "label": (
                    "While exact prompts are preferred, researchers can report high-level, plausibly "
                    "abstracted prompts used to guide the model."
                ),
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": True,
            },
            {
                "id": "q16",
                "label": "If available, please provide the exact prompts used to guide the model.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": False,
            },
            {
                "id": "q17",
                "label": "If applicable, please provide any global settings or instructions used to guide AI behavior.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": False,
            },
        ],
    },
    {
        "id": "additional-enhanced-disclosures",
        "title": "Additional Enhanced Disclosures",
        "summary": (
            "Code reveals whether automation introduced errors through implementation choices. Stateful "
            "systems may carry context across interactions, and explicitly acknowledging known biases helps "
            "readers interpret findings cautiously."
        ),
        "questions": [
            {
                "id": "q18",
                "label": "Please provide any scripts or code used to call the AI.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": False,
            },
            {
                "id": "q19",
                "label": (
                    "If an AI tool was used as an interviewer, describe the characterization of variance in "
                    "questions asked or representative samples of conversations."
                ),
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": False,
            },
            {
                "id": "q20",
                "label": "Was the system stateful or stateless during interaction?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "e.g. does the AI tool remember previous interactions and let them affect future "
                    "interactions?"
                ),
                "required": False,
            },
            {
                "id": "q21",
                "label": "Document any known biases that could affect survey results.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "e.g. cultural biases, language biases, demographic biases, all of which have been well "
                    "documented in AI systems"
                ),
                "required": False,
            },
            {
                "id": "q22",
                "label": "Why was the specific model and access/tooling chosen?",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": (
                    "Some reasonable considerations include: performance, transparency, reproducibility, "
                    "ethical considerations, cost, ease-of-use, no choice"
                ),
                "required": False,
            },
            {
                "id": "q23",
                "label": "If and where the AI failed or was wrong, was manual intervention needed? Please describe.",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": False,
            },
        ],
    },
    {
        "id": "human-respondents-disclosure",
        "title": "Human Respondents Disclosure",
        "summary": (
            "Do NOT report the number of AI instances used for any task, as this figure is often ambiguous, "
            "non-independent, and requires excessive context to interpret meaningfully. Reporting the number "
            "of human respondents clarifies the scale of human input versus automation."
        ),
        "questions": [
            {
                "id": "q24",
                "label": "Report the total number of humans who performed the task",
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "tooltip": "e.g., responded to the survey, validated AI outputs, coded data",
                "required": True,
            },
            {
                "id": "q25",
                "label": (
                    "If human data was augmented in any way using synthetic data, describe how the synthetic "
                    "data was created and used, and if or how the biases in the data were controlled for. "
                    "Disclose if synthetic respondents are used in figures/tables/standard errors."
                ),
                "type": "textarea",
                "placeholder": ANSWER_PLACEHOLDER,
                "required": True,
            },
        ],
    },
]

TEMPLATE = {
    "id": "ai-disclosure",
    "name": "AAPOR AI Disclosure Checklist",
    "description": "AAPOR's Disclosure Checklist for the Use of AI in Surveys",
    "sections": SECTIONS,
    "section_groups": [
        {
            "title": "Immediate Disclosures",
            "description": (
                "Immediate disclosures must be included in any reporting or methodological summaries and "
                "presented in a way that is clearly disclosed and easily accessible to readers."
            ),
            "section_ids": ["tasks-performed", "human-oversight", "human-respondents-disclosure"],
        },
        {
            "title": "Core/Enhanced Questions",
            "description": (
                "Core questions should be answered in all reporting scenarios ensuring consistent "
                "transparency across studies. Enhanced questions are always valuable to answer, as they "
                "provide deeper insight into methods and AI involvement, but they are not mandatory in every "
                "situation."
            ),
            "section_ids": [
                "model-details",
                "access-tooling-details",
                "core-prompts",
                "additional-enhanced-disclosures",
            ],
        },
    ],
    "instance_noun": "AI Tool",
    "add_instance_label": "+ Add Another AI Tool or Use Case",
    "instructions_heading": (
        "For each question in this checklist, the researcher should indicate one of the following:"
    ),
    "instructions": [
        "The answer to the question",
        "Question is not applicable",
        "Answer is unknown to the researcher and explain why",
        "Answer is proprietary and explain why",
        "Answer would violate privacy of participants and explain why",
    ],
    # q9 only applies to fine-tuned models
    "visibility_rules": {
        "q9": ("q8", "Yes"),
    },
    # q9 is numbered as a follow-up of q8; the questions after it keep their raw position
    "numbering_overrides": {
        "q9": "4a",
        "q10": "5",
        "q11": "6",
        "q12": "7",
    },
}
