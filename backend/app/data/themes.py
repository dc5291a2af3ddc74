"""
Canned index bundles for the keyword fallback of the company generator.

THEMES is ordered; the first theme with a matching trigger wins. A trigger
is a tuple of substrings that must ALL appear in the lower-cased prompt.

Usage:
    from app.data.themes import match_theme, generic_theme
"""
import copy
from typing import Dict, Any, List, Optional, Tuple

THEMES: List[Dict[str, Any]] = [
    {
        "key": "robotics",
        "triggers": [("robotics",), ("automation",)],
        "indexName": "Robotics & Automation Index",
        "description": "Companies building the robots, industrial automation systems and machine vision that are reshaping manufacturing, logistics and surgery.",
        "companies": [
            {"name": "Intuitive Surgical", "symbol": "ISRG", "sector": "Healthcare", "reasoning": "Pioneer of robot-assisted minimally invasive surgery"},
            {"name": "Rockwell Automation", "symbol": "ROK", "sector": "Industrials", "reasoning": "Industrial automation and factory control leader"},
            {"name": "Teradyne Inc.", "symbol": "TER", "sector": "Technology", "reasoning": "Owner of Universal Robots and Mobile Industrial Robots"},
            {"name": "ABB Ltd", "symbol": "ABBNY", "sector": "Industrials", "reasoning": "One of the largest industrial robot makers worldwide"},
            {"name": "NVIDIA Corporation", "symbol": "NVDA", "sector": "Technology", "reasoning": "Compute platforms and simulation software for robotics"},
            {"name": "Cognex Corporation", "symbol": "CGNX", "sector": "Technology", "reasoning": "Machine vision systems for automated production lines"},
            {"name": "Zebra Technologies", "symbol": "ZBRA", "sector": "Technology", "reasoning": "Warehouse automation and autonomous mobile robots"},
            {"name": "Symbotic Inc.", "symbol": "SYM", "sector": "Industrials", "reasoning": "AI-driven robotic warehouse automation systems"},
        ],
    },
    {
        "key": "clean_energy",
        "triggers": [("sustainable",), ("energy",), ("clean",), ("renewable",)],
        "indexName": "Clean Energy Innovation Index",
        "description": "Leading companies driving the transition to sustainable and renewable energy sources, including solar, wind, battery technology, and electric vehicles.",
        "companies": [
            {"name": "Tesla Inc.", "symbol": "TSLA", "sector": "Automotive", "reasoning": "Electric vehicle leader and energy storage pioneer"},
            {"name": "NextEra Energy", "symbol": "NEE", "sector": "Utilities", "reasoning": "Largest renewable energy generator in North America"},
            {"name": "First Solar Inc.", "symbol": "FSLR", "sector": "Energy", "reasoning": "Leading solar panel manufacturer and project developer"},
            {"name": "Enphase Energy", "symbol": "ENPH", "sector": "Energy", "reasoning": "Solar microinverter technology and energy management"},
            {"name": "Plug Power Inc.", "symbol": "PLUG", "sector": "Energy", "reasoning": "Hydrogen fuel cell solutions for clean energy"},
            {"name": "Brookfield Renewable", "symbol": "BEP", "sector": "Utilities", "reasoning": "Pure-play renewable power platform"},
            {"name": "Vestas Wind Systems", "symbol": "VWS.CO", "sector": "Energy", "reasoning": "Global wind turbine manufacturer"},
            {"name": "Albemarle Corporation", "symbol": "ALB", "sector": "Materials", "reasoning": "Lithium producer for battery technology"},
        ],
    },
    {
        "key": "young_ceos",
        "triggers": [("ceo", "40"), ("young", "ceo")],
        "indexName": "Young Visionary CEOs Index",
        "description": "Founder-led companies run by a younger generation of chief executives who built and still steer their businesses.",
        "companies": [
            {"name": "Meta Platforms Inc.", "symbol": "META", "sector": "Communication Services", "reasoning": "Founder Mark Zuckerberg has led the company since its dorm-room start"},
            {"name": "Snap Inc.", "symbol": "SNAP", "sector": "Communication Services", "reasoning": "Co-founder Evan Spiegel runs the camera and messaging platform"},
            {"name": "Airbnb Inc.", "symbol": "ABNB", "sector": "Consumer Discretionary", "reasoning": "Co-founder Brian Chesky leads the home-sharing marketplace"},
            {"name": "DoorDash Inc.", "symbol": "DASH", "sector": "Consumer Discretionary", "reasoning": "Co-founder Tony Xu built the leading US delivery network"},
            {"name": "Coinbase Global", "symbol": "COIN", "sector": "Financials", "reasoning": "Co-founder Brian Armstrong heads the largest US crypto exchange"},
            {"name": "Robinhood Markets", "symbol": "HOOD", "sector": "Financials", "reasoning": "Co-founder Vlad Tenev leads the retail brokerage app"},
            {"name": "Duolingo Inc.", "symbol": "DUOL", "sector": "Technology", "reasoning": "Co-founder Luis von Ahn runs the language-learning platform"},
            {"name": "Reddit Inc.", "symbol": "RDDT", "sector": "Communication Services", "reasoning": "Co-founder Steve Huffman returned to lead the community platform"},
        ],
    },
    {
        "key": "ai",
        "triggers": [("ai",), ("artificial intelligence",)],
        "indexName": "AI Revolution Index",
        "description": "Companies at the forefront of artificial intelligence and machine learning innovation, transforming industries through advanced AI technologies.",
        "companies": [
            {"name": "NVIDIA Corporation", "symbol": "NVDA", "sector": "Technology", "reasoning": "Leading AI chip manufacturer powering machine learning infrastructure"},
            {"name": "Microsoft Corporation", "symbol": "MSFT", "sector": "Technology", "reasoning": "Major AI investments through OpenAI partnership and Azure AI services"},
            {"name": "Alphabet Inc.", "symbol": "GOOGL", "sector": "Technology", "reasoning": "Google's AI research and DeepMind leading breakthrough AI models"},
            {"name": "Amazon.com Inc.", "symbol": "AMZN", "sector": "Technology", "reasoning": "AWS AI services and Alexa voice AI platform"},
            {"name": "Meta Platforms Inc.", "symbol": "META", "sector": "Technology", "reasoning": "Significant AI research in computer vision and natural language processing"},
            {"name": "Tesla Inc.", "symbol": "TSLA", "sector": "Automotive", "reasoning": "Autonomous driving AI and robotics development"},
            {"name": "Palantir Technologies", "symbol": "PLTR", "sector": "Technology", "reasoning": "Big data analytics and AI-powered decision making platforms"},
            {"name": "Advanced Micro Devices", "symbol": "AMD", "sector": "Technology", "reasoning": "High-performance computing chips for AI workloads"},
        ],
    },
    {
        "key": "digital_health",
        "triggers": [("healthcare",), ("health",), ("medical",)],
        "indexName": "Digital Health Innovation Index",
        "description": "Leading healthcare technology companies revolutionizing patient care through digital innovation, telemedicine, and medical AI.",
        "companies": [
            {"name": "UnitedHealth Group", "symbol": "UNH", "sector": "Healthcare", "reasoning": "Largest healthcare company with digital health initiatives"},
            {"name": "Johnson & Johnson", "symbol": "JNJ", "sector": "Healthcare", "reasoning": "Pharmaceutical giant investing in digital therapeutics"},
            {"name": "Pfizer Inc.", "symbol": "PFE", "sector": "Healthcare", "reasoning": "Leading pharmaceutical company with digital health programs"},
            {"name": "Merck & Co.", "symbol": "MRK", "sector": "Healthcare", "reasoning": "Major pharmaceutical with AI drug discovery initiatives"},
            {"name": "Abbott Laboratories", "symbol": "ABT", "sector": "Healthcare", "reasoning": "Medical devices and digital health monitoring solutions"},
            {"name": "Dexcom Inc.", "symbol": "DXCM", "sector": "Healthcare", "reasoning": "Continuous glucose monitoring and digital diabetes management"},
            {"name": "Teladoc Health", "symbol": "TDOC", "sector": "Healthcare", "reasoning": "Leading telemedicine and virtual care platform"},
            {"name": "Veeva Systems", "symbol": "VEEV", "sector": "Healthcare", "reasoning": "Cloud software for pharmaceutical and biotech industries"},
        ],
    },
]

GENERIC_THEME: Dict[str, Any] = {
    "key": "innovation",
    "indexName": "Innovation Leaders Index",
    "description": 'Companies driving innovation and growth in themes related to "{prompt}", representing the future of industry transformation.',
    "companies": [
        {"name": "Apple Inc.", "symbol": "AAPL", "sector": "Technology", "reasoning": "Innovation leader in consumer technology and services"},
        {"name": "Microsoft Corporation", "symbol": "MSFT", "sector": "Technology", "reasoning": "Cloud computing and enterprise software innovation"},
        {"name": "Alphabet Inc.", "symbol": "GOOGL", "sector": "Technology", "reasoning": "Search, cloud, and emerging technology leadership"},
        {"name": "Amazon.com Inc.", "symbol": "AMZN", "sector": "Technology", "reasoning": "E-commerce and cloud infrastructure pioneer"},
        {"name": "Tesla Inc.", "symbol": "TSLA", "sector": "Automotive", "reasoning": "Electric vehicle and clean energy innovation"},
        {"name": "NVIDIA Corporation", "symbol": "NVDA", "sector": "Technology", "reasoning": "Advanced computing and AI chip technology"},
        {"name": "Meta Platforms Inc.", "symbol": "META", "sector": "Technology", "reasoning": "Social media and metaverse technology development"},
        {"name": "Netflix Inc.", "symbol": "NFLX", "sector": "Communication", "reasoning": "Streaming technology and content innovation"},
    ],
}


def _triggered(prompt_lower: str, triggers: List[Tuple[str, ...]]) -> bool:
    return any(all(word in prompt_lower for word in trigger) for trigger in triggers)


def match_theme(prompt: str) -> Optional[Dict[str, Any]]:
    """First theme whose trigger matches the prompt (deep copy), or None."""
    prompt_lower = prompt.lower()
    for theme in THEMES:
        if _triggered(prompt_lower, theme["triggers"]):
            return copy.deepcopy(theme)
    return None


def generic_theme(prompt: str) -> Dict[str, Any]:
    """The catch-all bundle with the prompt interpolated into its description."""
    theme = copy.deepcopy(GENERIC_THEME)
    theme["description"] = theme["description"].format(prompt=prompt)
    return theme
