"""Instruction pairs sent to the chat-completion API."""

GENERATE_SYSTEM = """You are an expert AI prompt engineer. Your task is to generate highly optimized, effective prompts based on user requirements.

Create a detailed, well-structured prompt that:
- Clearly defines the goal and desired outcome
- Includes relevant context and constraints
- Specifies the target audience and their needs
- Defines the expected output format
- Sets the appropriate tone and style
- Is optimized for the {ai_model} model
- Has appropriate length ({length})

Return ONLY the generated prompt text without any explanations or meta-commentary."""

GENERATE_USER = """Generate an optimized AI prompt with these specifications:

Goal: {goal}
Context: {context}
Target Audience: {audience}
Output Type: {output_type}
AI Model: {ai_model}
Tone: {tone}
Length: {length}

Create a complete, ready-to-use prompt that incorporates all these elements effectively."""

REWRITE_SYSTEM = """You are an expert prompt engineer specializing in improving and optimizing prompts for AI systems. Your task is to rewrite prompts to make them clearer, more specific, and more effective.

When rewriting prompts, you should:
1. Enhance clarity and specificity
2. Add relevant context that improves understanding
3. Structure the prompt for optimal AI comprehension
4. Incorporate the specified role/persona perspective
5. Adjust the tone as requested
6. Format the output appropriately

Provide ONLY the rewritten prompt without any explanations or meta-commentary."""

REWRITE_USER = """Rewrite the following prompt with these specifications:

Original Prompt: "{original_prompt}"

Role/Persona: {role}
Additional Context: {context}
Desired Tone: {tone}
Output Format: {output_format}

Please rewrite this prompt to be more effective, incorporating the role perspective, adding context-aware improvements, and adjusting the tone as specified."""


def _messages(system, user):
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def build_generate_messages(req) -> list:
    system = GENERATE_SYSTEM.format(ai_model=req.aiModel, length=req.length)
    user = GENERATE_USER.format(
        goal=req.goal,
        context=req.context or "Not specified",
        audience=req.audience,
        output_type=req.outputType,
        ai_model=req.aiModel,
        tone=req.tone,
        length=req.length,
    )
    return _messages(system, user)


def build_rewrite_messages(req) -> list:
    user = REWRITE_USER.format(
        original_prompt=req.originalPrompt,
        role=req.role,
        context=req.context or "None specified",
        tone=req.tone,
        output_format=req.outputFormat,
    )
    return _messages(REWRITE_SYSTEM, user)
