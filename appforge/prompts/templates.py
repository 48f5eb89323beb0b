"""
Prompt templates for naming, generating, editing and improving apps.

Each template is versioned and hashable; the builder logs the hash of every
prompt it renders so a generation can be traced to its exact instructions.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from string import Template
from typing import Any


@dataclass
class PromptTemplate:
    """A versioned prompt template.

    ``header`` and ``output_format_instructions`` are ``str.format`` templates;
    ``sections`` are inserted between them verbatim.
    """

    template_id: str
    version: str
    header: str
    sections: list[str] = field(default_factory=list)
    output_format_instructions: str = ""

    def render(self, **kwargs: Any) -> str:
        """Render the prompt with variables.

        Args:
            **kwargs: Template variables substituted into the header and
                output format instructions.

        Returns:
            The full prompt text.
        """
        parts = [self.header.format(**kwargs), *self.sections]
        if self.output_format_instructions:
            parts.append(self.output_format_instructions.format(**kwargs))
        return "\n\n".join(part.strip("\n") for part in parts)

    def get_hash(self) -> str:
        """Get a deterministic 16-character hash of the template."""
        content = ":".join(
            [self.template_id, self.version, self.header, *self.sections, self.output_format_instructions]
        )
        return hashlib.sha256(content.encode()).hexdigest()[:16]


NAMING_TEMPLATE = PromptTemplate(
    template_id="app_naming",
    version="1.0.0",
    header='''Based on this app idea: "{description}"

Generate a JSON response with:
1. A short, punchy app name (2-3 words max, capitalize each word)
2. A concise description (7 words or less)''',
    output_format_instructions='''Output ONLY valid JSON in this exact format:
{{"name": "App Name", "shortDescription": "Short description here"}}''',
)


# The generated component calls back into the image endpoints; ``$image_api``
# is the base URL those endpoints are served under.
IMAGE_HOOK = Template('''```typescript
// Built-in Gemini Image Generator Hook
const useImageGenerator = () => {
  const [images, setImages] = useState<Record<string, string>>({});
  const [loading, setLoading] = useState<Record<string, boolean>>({});

  // Helper function to convert File to base64
  const fileToBase64 = (file: File): Promise<string> => {
    return new Promise((resolve, reject) => {
      const reader = new FileReader();
      reader.onload = () => {
        const base64 = reader.result as string;
        resolve(base64.split(',')[1]); // Remove data URI prefix
      };
      reader.onerror = reject;
      reader.readAsDataURL(file);
    });
  };

  // Generate new image from text prompt (text-to-image)
  const generate = async (key: string, prompt: string, aspectRatio: '1:1' | '16:9' | '9:16' | '2:3' | '3:2' | '3:4' | '4:3' | '4:5' | '5:4' | '21:9' = '16:9') => {
    setLoading(prev => ({ ...prev, [key]: true }));
    try {
      const response = await fetch('$image_api/generate-image', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify({ prompt, aspectRatio })
      });
      const data = await response.json();
      if (data.success) {
        setImages(prev => ({ ...prev, [key]: data.imageUrl }));
        return data.imageUrl;
      }
    } catch (error) {
      console.error('Image generation failed:', error);
    } finally {
      setLoading(prev => ({ ...prev, [key]: false }));
    }
    return null;
  };

  // Edit existing image with text prompt (image-to-image)
  const editImage = async (key: string, prompt: string, inputImageBase64: string) => {
    setLoading(prev => ({ ...prev, [key]: true }));
    try {
      const response = await fetch('$image_api/edit-image', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify({ prompt, inputImage: inputImageBase64 })
      });
      const data = await response.json();
      if (data.success) {
        setImages(prev => ({ ...prev, [key]: data.imageUrl }));
        return data.imageUrl;
      }
    } catch (error) {
      console.error('Image editing failed:', error);
    } finally {
      setLoading(prev => ({ ...prev, [key]: false }));
    }
    return null;
  };

  return { images, loading, generate, editImage, fileToBase64 };
};
```''')


IMAGE_USAGE_RULES = '''**CRITICAL RULE: When to use generate() vs editImage():**

NEVER use `generate()` if the user uploaded an image file! This will ignore their upload and create a random new image.

ALWAYS use `editImage()` when:
- User uploads/selects a file via <input type="file">
- User drags and drops an image
- User provides their own photo/image
- The app stores uploaded image in state (e.g., setUploadedImage, setOriginalImage)
- You want to MODIFY/TRANSFORM the user's actual image

ONLY use `generate()` when:
- Creating brand new images from scratch with NO user upload
- Generating backgrounds, hero banners, placeholder images
- Creating artwork without any input image

**Implementation pattern for image upload apps:**
```typescript
const [uploadedImage, setUploadedImage] = useState<string>(''); // Store data URI

const handleFileUpload = (file: File) => {
  const reader = new FileReader();
  reader.onload = (e) => {
    setUploadedImage(e.target?.result as string); // Store as data URI
  };
  reader.readAsDataURL(file);
};

const handleProcess = async () => {
  if (!uploadedImage) return;
  // Extract base64 from data URI
  const base64Data = uploadedImage.split(',')[1];
  // ALWAYS use editImage for uploaded images
  await editImage('result', 'Your transformation prompt', base64Data);
};
```'''


CREATE_IMAGE_DETECTION = '''AI IMAGE GENERATION (SMART DETECTION):
IMPORTANT: Analyze the app description for image-related keywords. If the app involves images, photos, pictures, galleries, uploads, visual content, graphics, art, drawings, editing, filters, or manipulation - AUTOMATICALLY include the built-in image generator helper.

**Detection Keywords:** image, photo, picture, gallery, upload, camera, visual, graphic, art, draw, edit, filter, manipulate, generate, create, avatar, profile pic, banner, thumbnail, media

**If image features ARE needed, include this custom hook at the top of your component:**'''


CREATE_IMAGE_EXAMPLES = '''**If image features are NOT needed:** Skip all image generation code entirely. Do not include the useImageGenerator hook or any image-related functionality.

**Examples of when TO include:**
- "photo gallery app" -> YES, include useImageGenerator
- "image upload and edit tool" -> YES, include useImageGenerator
- "art generator" -> YES, include useImageGenerator
- "profile picture creator" -> YES, include useImageGenerator

**Examples of when NOT to include:**
- "todo list app" -> NO, skip image generation
- "calculator" -> NO, skip image generation
- "weather dashboard" -> NO, skip image generation
- "chat app" -> NO, skip image generation (unless mentions "profile pics" or "avatars")'''


EDIT_IMAGE_DETECTION = '''AI IMAGE GENERATION (SMART DETECTION):
IMPORTANT: Check if the edit request involves images, photos, pictures, uploads, or visual content. If YES, add or use the built-in useImageGenerator hook.

**If image features need to be ADDED and don't exist, include this hook:**'''


EDIT_IMAGE_EXAMPLES = '''**If the hook already exists in the code:** Just use it to implement the requested changes following the rules above.
**If edit request has nothing to do with images:** Don't add or modify image-related code.'''


def generation_template(image_api: str) -> PromptTemplate:
    """Template for generating a new component from a description."""
    return PromptTemplate(
        template_id="component_generation",
        version="1.0.0",
        header='''Create a complete, working React + TypeScript component for this app: "{description}"

IMPORTANT REQUIREMENTS:
1. Generate a single, self-contained React component file
2. Use TypeScript with proper types
3. Use Tailwind CSS for all styling (already available in the project)
4. Make it fully functional and interactive
5. Include proper state management with React hooks
6. The component MUST be named EXACTLY: {component_name}
7. Export the component as: export const {component_name}: React.FC = () => {{ ... }}
8. CRITICAL: Always use explicit semicolons after every statement - NEVER rely on ASI
9. When returning template literals, format like: return (`...`); with parentheses
10. RESPONSIVE LAYOUT: The component will be rendered inside a modal window. Do NOT use min-h-screen or fixed heights. Instead:
    - Use h-full and w-full on the root container to fill the available space
    - Use flex layout with flex-col or flex-row to organize content
    - Make the UI responsive and fit within the available space WITHOUT scrolling unless content is dynamic
    - Example structure: <div className="w-full h-full flex flex-col p-6">...</div>''',
        sections=[
            CREATE_IMAGE_DETECTION,
            IMAGE_HOOK.substitute(image_api=image_api),
            IMAGE_USAGE_RULES,
            CREATE_IMAGE_EXAMPLES,
        ],
        output_format_instructions='''OUTPUT FORMAT:
Please output ONLY the component code, starting with imports and ending with the export.
Do not include explanations, markdown code blocks, or extra commentary.
Just pure TypeScript/React code that can be saved directly to a .tsx file.

CRITICAL: The export must be EXACTLY:
export const {component_name}: React.FC = () => {{
  // Component logic here
  return (
    <div className="w-full h-full flex flex-col p-6">
      {{/* UI here */}}
    </div>
  );
}};''',
    )


def edit_template(image_api: str) -> PromptTemplate:
    """Template for editing an existing component."""
    return PromptTemplate(
        template_id="component_edit",
        version="1.0.0",
        header='''You are editing an existing React + TypeScript component. Here is the current code:

```typescript
{current_source}
```

User's edit request: "{instructions}"

IMPORTANT REQUIREMENTS:
1. Modify the existing code based on the user's request
2. Maintain the EXACT component name: {component_name}
3. Keep using TypeScript with proper types
4. Keep using Tailwind CSS for styling
5. Maintain the export format: export const {component_name}: React.FC = () => {{ ... }}
6. CRITICAL: Always use explicit semicolons after every statement
7. RESPONSIVE LAYOUT: Keep using w-full h-full on root container with overflow-hidden
8. Make sure the component still fills the modal window without scrollbars''',
        sections=[
            EDIT_IMAGE_DETECTION,
            IMAGE_HOOK.substitute(image_api=image_api),
            IMAGE_USAGE_RULES,
            EDIT_IMAGE_EXAMPLES,
        ],
        output_format_instructions='''OUTPUT FORMAT:
Output ONLY the complete updated component code, starting with imports and ending with the export.
Do not include explanations, markdown code blocks, or extra commentary.
Just pure TypeScript/React code that can be saved directly to a .tsx file.
The export must remain EXACTLY: export const {component_name}: React.FC = () => {{ ... }};''',
    )


IMPROVE_TEMPLATE = PromptTemplate(
    template_id="prompt_improvement",
    version="1.0.0",
    header='''You are an expert UI/UX designer helping create beautiful, functional React web apps.

User's basic idea: "{raw_description}"

Transform this into a detailed prompt that will help a code generator produce a polished, professional React component.''',
    sections=[
        '''ENHANCEMENT RULES:

1. COLOR PALETTE (Always specify):
   - Pick 2-3 harmonious colors with hex codes
   - Ensure good contrast (WCAG AA minimum)
   - Examples: Indigo (#4F46E5) + Pink (#EC4899), Teal (#14B8A6) + Cyan (#06B6D4)

2. LAYOUT & SPACING:
   - Use consistent spacing scale: 8px, 16px, 24px, 32px, 48px
   - Specify padding: generous (24-32px for cards)
   - Border radius: 8-16px for modern look
   - Center main content with max-width constraints

3. TYPOGRAPHY:
   - Define hierarchy: Title (20-24px), Body (14-16px), Small (12-13px)
   - Specify font weights: Semibold for titles (600), Medium for emphasis (500), Regular for body (400)

4. VISUAL ELEMENTS:
   - Add ONE signature visual element (gradient background, illustration, icon, or animation)
   - Use subtle shadows for depth: shadow-sm, shadow-md
   - Glassmorphism/cards: frosted glass effect with backdrop-blur

5. INTERACTIONS (Keep it smooth):
   - Hover states: subtle scale (1.02-1.05) or color change
   - Transitions: 200-300ms ease for snappy feel
   - Loading states: spinner or skeleton UI
   - Button states: clear hover, active, disabled

6. SIMPLICITY CONSTRAINTS:
   - List 3-5 CORE features only (avoid feature creep)
   - Explicitly state what NOT to include
   - One primary action per screen
   - Mobile-responsive: min 44px touch targets

7. FUNCTIONAL CLARITY:
   - Clear input labels and placeholders
   - Visible feedback for all actions (success/error messages)
   - Logical information hierarchy (most important at top)

8. ANIMATION GUIDELINES:
   - Use sparingly: entrance animations only
   - Fade-in: 300ms for new content
   - Slide-in: 200ms for modals/drawers
   - NO distracting continuous animations''',
    ],
    output_format_instructions='''OUTPUT FORMAT:
Write a concise but detailed description (3-5 sentences) covering:
- Core functionality
- Visual design (colors, layout, key UI elements)
- One standout visual feature
- What to avoid/exclude

Example output:
"Create a Tic Tac Toe game with a clean 3x3 grid using indigo (#4F46E5) for X and pink (#EC4899) for O. Center the board with generous 32px padding, 16px rounded corners, and subtle shadow-md. Add smooth hover effects (scale 1.05, 200ms) on empty cells and animate the winning line with a fade-in stroke. Display current player turn above the board in 20px semibold text. Include a reset button below. Keep it simple: no AI opponent, no score tracking, no complex animations. Mobile-responsive with 56px cell size for easy tapping."

Now enhance the user's prompt following these rules. Output ONLY the enhanced description.''',
)
