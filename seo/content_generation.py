"""
Template-based content generation.

Builds a long-form Markdown article plus an FAQ section for a target keyword.
Supports: strategy guide body, FAQ list, title and meta description.
Output is deterministic for a given year; no external service is called.
"""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .text_utils import entity_name

logger = logging.getLogger(__name__)

PROFESSIONAL_TONE = 'Professional'

FALLBACK_APPLICATIONS = [
    'Customer Experience',
    'Operational Efficiency',
    'Data-Driven Decisions',
]


class ContentGenerationError(ValueError):
    """Raised when the generator is missing required input."""


def generate_article(
    target_keyword: str,
    business_type: str,
    location: str = '',
    tone_of_voice: str = PROFESSIONAL_TONE,
    entities: Iterable = (),
    year: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Generate a strategy-guide article for a keyword.

    Args:
        target_keyword: Keyword the article targets
        business_type: Type of business (E-commerce, SaaS, Local Business, ...)
        location: Optional region the business serves
        tone_of_voice: "Professional" selects formal copy, anything else approachable copy
        entities: Entity dicts or names, each gets an applications bullet
        year: Year quoted in the copy, defaults to the current year

    Returns:
        Dict with title, meta_description, body (Markdown) and faq_section
    """
    keyword = (target_keyword or '').strip()
    business = (business_type or '').strip()
    if not keyword:
        raise ContentGenerationError('Target keyword is required.')
    if not business:
        raise ContentGenerationError('Business type is required.')

    location = (location or '').strip()
    year = year or date.today().year
    location_text = f' in {location}' if location else ''

    names = [name for name in (entity_name(e) for e in entities or []) if name]

    article = {
        'title': f'{keyword} for {business}: Complete {year} Strategy Guide',
        'meta_description': (
            f'Master {keyword} strategies for your {business} business{location_text}. '
            f'Expert insights, actionable tips, and proven methods for {year} success.'
        ),
        'body': _build_body(keyword, business, location, tone_of_voice, names, year),
        'faq_section': generate_faqs(keyword, business, location),
    }
    logger.debug(f"Generated article for '{keyword}' ({business}) with {len(names)} entities")
    return article


def generate_faqs(target_keyword: str, business_type: str, location: str = '') -> List[Dict[str, str]]:
    """Six question/answer pairs about the keyword for the business type."""
    keyword = (target_keyword or '').strip()
    business = (business_type or '').strip()
    business_lower = business.lower()
    location_text = f' in {location.strip()}' if location and location.strip() else ''

    return [
        {
            'question': f'What is {keyword} and why does it matter for {business} success?',
            'answer': (
                f'{keyword} covers the strategies and day-to-day practices that help '
                f'{business_lower} organizations reach their goals efficiently. It matters because '
                f'it shapes operational efficiency, customer satisfaction and competitive '
                f'position{location_text}.'
            ),
        },
        {
            'question': f'How long does it take to see results from {keyword}?',
            'answer': (
                f'Most {business_lower} organizations see measurable improvements within 60-90 '
                f'days. Larger, transformational results usually arrive after 6-12 months of '
                f'consistent work and optimization.'
            ),
        },
        {
            'question': f'What are the critical success factors for {keyword} in {business}?',
            'answer': (
                f'Strategic alignment, stakeholder buy-in, suitable technology, training and '
                f'reliable performance measurement. Organizations{location_text} should also '
                f'account for local market dynamics and regulation.'
            ),
        },
        {
            'question': f'How can I measure the ROI of {keyword} initiatives?',
            'answer': (
                'Track quantitative results (cost savings, revenue growth, efficiency gains) '
                'alongside qualitative ones (customer satisfaction, employee engagement). Record '
                'a baseline before you start and follow defined KPIs over time.'
            ),
        },
        {
            'question': f'What resources are needed to implement {keyword} strategies?',
            'answer': (
                'Dedicated project leadership, a cross-functional team, the right tools and '
                'platforms, a training budget and ongoing operational support. Exact needs '
                'depend on the size and maturity of the organization.'
            ),
        },
        {
            'question': f'How does {keyword} differ for {business} compared to other industries?',
            'answer': (
                f'{business} organizations face their own regulatory, operational and customer '
                f'expectations. {keyword} strategies need to address those factors while '
                f'borrowing proven practices from other sectors where they fit.'
            ),
        },
    ]


def _build_body(keyword, business, location, tone_of_voice, entity_names, year):
    """Assemble the Markdown body section by section."""
    sections = [
        _intro_section(keyword, business, location, year),
        _applications_section(keyword, business, entity_names),
        _best_practices_section(keyword, business, tone_of_voice),
        _challenges_section(),
        _market_section(keyword, location),
        _roadmap_section(keyword),
        _conclusion_section(keyword, business, location, tone_of_voice),
    ]
    return '\n\n'.join(section.strip() for section in sections) + '\n'


def _intro_section(keyword, business, location, year):
    business_lower = business.lower()
    location_text = f' in {location}' if location else ''
    return f"""
# {keyword}: The Complete {business} Strategy Guide for {year}

## Executive Summary

{keyword} has become a cornerstone of successful {business_lower} operations{location_text}. This guide brings together actionable strategies, industry insights and proven methods to help your business excel in this critical area.

## What is {keyword}?

{keyword} covers the strategic approaches and practical execution that let {business_lower} organizations reach their operational goals. For businesses{location_text}, understanding and mastering {keyword} is essential for sustainable growth and a lasting competitive advantage.

### Core Components

1. **Strategic Planning**: Building a complete {keyword} framework
2. **Implementation Excellence**: Executing the plan with precision and efficiency
3. **Performance Optimization**: Continuous improvement and refinement
4. **Technology Integration**: Using modern tools and platforms
5. **Stakeholder Alignment**: Securing organizational buy-in and support
"""


def _applications_section(keyword, business, entity_names):
    business_lower = business.lower()
    names = entity_names or FALLBACK_APPLICATIONS
    bullets = '\n'.join(
        f'- **{name}**: Strategic implementation for stronger {business_lower} operations'
        for name in names
    )
    return f"""
## Industry-Specific Applications for {business}

### Primary Applications

{bullets}

### Implementation Framework

#### Phase 1: Assessment and Planning
- Complete analysis of current {keyword} capabilities
- Identification of optimization opportunities
- Development of a strategic roadmap

#### Phase 2: Strategy Development
- Creation of tailored {keyword} frameworks
- Integration with existing {business_lower} processes
- Risk assessment and mitigation planning

#### Phase 3: Implementation and Execution
- Systematic rollout of {keyword} initiatives
- Team training and capability development
- Performance monitoring and adjustment
"""


def _best_practices_section(keyword, business, tone_of_voice):
    if tone_of_voice == PROFESSIONAL_TONE:
        approach = (
            'Develop a comprehensive strategic framework that aligns with organizational '
            'objectives and prevailing market dynamics.'
        )
    else:
        approach = 'Start with a clear strategy that fits your business goals and your market.'
    return f"""
## Best Practices for {business} Organizations

### 1. Strategic Approach

{approach}

### 2. Technology Integration

Modern {keyword} success depends on choosing the right technology. Consider:
- Automation tools for efficiency gains
- Analytics platforms for data-driven decisions
- Integration systems for seamless operations

### 3. Performance Measurement

Set clear KPIs to measure {keyword} success:
- Operational efficiency metrics
- Customer satisfaction indicators
- ROI and financial performance measures
- Quality and compliance standards
"""


def _challenges_section():
    return """
## Common Challenges and Solutions

### Challenge: Resource Constraints

**Solution**: Prioritize high-impact initiatives and use a phased approach to make the most of limited resources.

### Challenge: Change Management

**Solution**: Plan stakeholder communication and training early, and roll changes out gradually.

### Challenge: Technology Integration

**Solution**: Assess existing systems first and choose integrations that minimize disruption while maximizing benefit.

### Challenge: Performance Measurement

**Solution**: Establish baseline metrics, implement reliable tracking and report on progress regularly.
"""


def _market_section(keyword, location):
    if location:
        heading = f'Regional Considerations for {location}'
        text = (
            f'Businesses operating in {location} should weigh local market dynamics, regulatory '
            f'requirements and cultural factors that affect {keyword} implementation.'
        )
    else:
        heading = 'Market Considerations'
        text = (
            'Weigh local market dynamics, regulatory requirements and industry-specific '
            'factors before committing to strategic decisions.'
        )
    return f"""
## {heading}

{text}

### Key Factors
- Market maturity and competitive landscape
- Regulatory compliance requirements
- Cultural and operational preferences
- Technology infrastructure considerations
"""


def _roadmap_section(keyword):
    return f"""
## Implementation Roadmap

### Months 1-2: Foundation Building
- Conduct a full assessment
- Develop the strategic framework
- Secure stakeholder alignment

### Months 3-4: Initial Implementation
- Deploy core {keyword} capabilities
- Launch training programs
- Establish measurement systems

### Months 5-6: Optimization and Scaling
- Analyze performance data
- Refine processes and procedures
- Scale the initiatives that work

## Measuring Success

### Key Performance Indicators
- **Efficiency Metrics**: Process improvements and resource optimization
- **Quality Indicators**: Service delivery and customer satisfaction
- **Financial Performance**: ROI, cost reduction and revenue impact
- **Strategic Alignment**: Progress toward organizational objectives

### Reporting and Analysis

Regular performance reviews should include:
- Monthly operational metrics
- Quarterly strategic assessments
- Annual evaluations
- Continuous improvement recommendations

## Future Trends and Considerations

The {keyword} landscape keeps evolving, with emerging trends including:
- More automation and AI integration
- Richer data analytics capabilities
- Greater focus on sustainability and social responsibility
- Broader digital transformation initiatives
"""


def _conclusion_section(keyword, business, location, tone_of_voice):
    business_lower = business.lower()
    location_text = f' in {location}' if location else ''
    if tone_of_voice == PROFESSIONAL_TONE:
        closing = (
            'We recommend engaging experienced professionals to ensure optimal implementation '
            'and results.'
        )
    else:
        closing = (
            'Ready to get started? Consider working with experts who can help you put these '
            'strategies into practice.'
        )
    return f"""
## Conclusion

Successful {keyword} implementation calls for a strategic approach, careful planning and continuous optimization. {business} organizations that invest in strong {keyword} capabilities will be better positioned for long-term success.

{closing}

---

*This guide provides foundational insights for {keyword} success. For strategies tailored to your specific {business_lower} needs{location_text}, consider consulting industry experts.*
"""
