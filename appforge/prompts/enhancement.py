"""
Provider-specific prompt enhancement.

Some models follow explicit structural guidance (design tokens, worked
examples, a checklist, hard output rules) much more reliably than prose
requirements. For those providers the block below is appended to the base
prompt.
"""

from __future__ import annotations

from collections.abc import Iterable

DESIGN_SYSTEM_BLOCK = '''# DESIGN SYSTEM REQUIREMENTS (Follow these guidelines precisely):

## Visual Hierarchy
- Use consistent spacing scale: space-y-2 (0.5rem), space-y-4 (1rem), space-y-6 (1.5rem), space-y-8 (2rem)
- Typography scale: text-3xl/text-2xl (headings), text-lg (subheadings), text-base (body), text-sm (captions)
- Font weights: font-bold (main headings), font-semibold (section headers/emphasis), font-medium (labels), font-normal (body)

## Color Strategy & Contrast
- Primary actions: bg-blue-600 text-white hover:bg-blue-700 active:bg-blue-800
- Success states: bg-green-600 text-white hover:bg-green-700
- Warning states: bg-yellow-500 text-white hover:bg-yellow-600
- Destructive actions: bg-red-600 text-white hover:bg-red-700
- Neutral UI: bg-gray-100, bg-gray-200 for backgrounds, text-gray-600/text-gray-700 for text
- WCAG AA compliance: Ensure 4.5:1 contrast ratio minimum for all text

## Interactive Elements (CRITICAL - Never skip these)
- ALL buttons MUST have hover states: hover:bg-opacity-90 or hover:scale-105 or hover:shadow-lg
- ALL buttons MUST have transitions: transition-all duration-200 or transition-colors
- Active states for tactile feedback: active:scale-95 or active:bg-opacity-80
- Disabled states: disabled:opacity-50 disabled:cursor-not-allowed
- Focus visibility for accessibility: focus:ring-2 focus:ring-offset-2 focus:ring-blue-500 focus:outline-none

## Layout Patterns
- Cards: rounded-lg p-4 md:p-6 shadow-md bg-white border border-gray-200
- Form inputs: w-full px-3 py-2 border border-gray-300 rounded-md focus:ring-2 focus:ring-blue-500 focus:border-blue-500
- Buttons: px-4 py-2 md:px-6 md:py-3 rounded-lg font-semibold shadow-md hover:shadow-lg
- Consistent padding/margin: Use 4-unit increments (p-4, p-6, p-8, mt-4, mb-6, etc.)

## Accessibility Requirements
- All icon-only buttons need aria-label attributes
- Form inputs need associated <label> elements with htmlFor
- Loading states need aria-live="polite" for screen readers
- Interactive elements need keyboard support (onKeyDown for Enter/Space keys)

# GOOD UI EXAMPLES (Study these patterns):

Example of a well-structured button:
<button
  onClick={handleClick}
  disabled={isLoading}
  className="px-6 py-3 bg-blue-600 text-white rounded-lg font-semibold
             hover:bg-blue-700 active:scale-95 disabled:opacity-50
             transition-all duration-200 shadow-md hover:shadow-lg
             focus:ring-2 focus:ring-offset-2 focus:ring-blue-500 focus:outline-none"
  aria-label="Submit form"
>
  {isLoading ? 'Processing...' : 'Submit'}
</button>

Example of a proper form input with label:
<div className="space-y-2">
  <label htmlFor="email" className="block text-sm font-medium text-gray-700">
    Email Address
  </label>
  <input
    id="email"
    type="email"
    value={email}
    onChange={(e) => setEmail(e.target.value)}
    className="w-full px-3 py-2 border border-gray-300 rounded-md
               focus:ring-2 focus:ring-blue-500 focus:border-blue-500
               transition-colors"
    placeholder="you@example.com"
    aria-required="true"
  />
  {error && <p className="text-sm text-red-600">{error}</p>}
</div>

Example of loading state with spinner:
{isLoading && (
  <div className="flex items-center justify-center py-8" aria-live="polite">
    <div className="animate-spin rounded-full h-8 w-8 border-b-2 border-blue-600"></div>
    <span className="ml-3 text-gray-600">Loading...</span>
  </div>
)}

# QUALITY CHECKLIST (Verify ALL items before outputting code):
- [ ] All useState declarations have explicit TypeScript types (e.g., useState<string>(''))
- [ ] Every interactive element (button, input, link) has hover and focus states
- [ ] All buttons have transition classes (transition-all or transition-colors)
- [ ] Loading states exist for ALL async operations with visual feedback
- [ ] Error handling with try-catch for ALL API calls and async operations
- [ ] Responsive classes (sm:, md:, lg:) used for mobile-first design
- [ ] Accessibility: aria-labels on icon buttons, aria-live on dynamic content
- [ ] No console.log or debugging code left in the component
- [ ] Proper semantic HTML elements (button not div, input with label, etc.)
- [ ] Component uses w-full h-full on root (no min-h-screen or fixed viewport heights)
- [ ] TypeScript interfaces defined for all complex objects and props

# OUTPUT FORMAT RULES (CRITICAL - Follow exactly):
1. Output MUST START with: import React
2. Output MUST END with: };
3. NO text before the first import statement
4. NO explanatory text after the final closing brace
5. NO markdown code fences (```) around the code
6. NO comments outside the actual TypeScript code
7. Code comments inside the component ARE encouraged for clarity
8. The export MUST be exactly: export const ComponentName: React.FC = () => { ... }'''


def enhance_for_provider(base_prompt: str, provider_name: str, enhanced_providers: Iterable[str]) -> str:
    """Append the design-system block when ``provider_name`` benefits from it.

    Args:
        base_prompt: Rendered generation or edit prompt
        provider_name: Provider that will receive the prompt
        enhanced_providers: Names of providers that get the block

    Returns:
        ``base_prompt`` followed by the block, or ``base_prompt`` unchanged.
    """
    if provider_name.lower() not in {name.lower() for name in enhanced_providers}:
        return base_prompt
    return f"{base_prompt}\n\n{DESIGN_SYSTEM_BLOCK}\n"
