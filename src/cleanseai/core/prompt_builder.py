"""Instruction template for object removal.

The generation model receives the user's image together with a single
instruction text. The instruction wraps the user's free-text description in
a fixed template that tells the model to:

1. identify and remove the described element,
2. reconstruct the background it occluded,
3. keep the original quality, detail, colours and textures,
4. answer with the edited image only, adding text only when it cannot
   process the image.

The template governs model behaviour, so the wording is kept as a module
constant rather than configuration.

Usage
-----
::

    prompt = build_removal_prompt("the person in the red shirt")
"""

from __future__ import annotations

REMOVAL_PROMPT_TEMPLATE = """
You are an expert image processing specialist focused on inpainting and object removal. Your task is to remove the object or imperfection described by the user from the provided image.

**User's Request:** "{user_prompt}"

**Instructions:**
1.  **Analyze and Remove:** Carefully identify and completely remove the element described in the user's request.
2.  **Reconstruct:** Use advanced inpainting algorithms to perfectly reconstruct the background occluded by the removed object. The result should be seamless and natural.
3.  **Preserve Quality:** Maintain the original high-definition quality. Ensure no visual artifacts, distortions, or compression artifacts are introduced. Preserve all original image details, colors, and textures.
4.  **Output:** Provide only the clean, edited image as the output. Do not add any text response unless you are unable to process the image.

**Critical Warning:** The final image must look natural and un-edited. The reconstruction of the background must be flawless.
"""


def build_removal_prompt(user_prompt: str) -> str:
    """Embed the user's description in the removal instruction template.

    The description is inserted verbatim. Callers are responsible for
    rejecting blank descriptions before getting here.

    Args:
        user_prompt: What the user wants removed, e.g. "the red car".

    Returns:
        The full instruction text sent to the model.
    """
    # str.replace rather than str.format: braces in user text must survive.
    return REMOVAL_PROMPT_TEMPLATE.replace("{user_prompt}", user_prompt)
