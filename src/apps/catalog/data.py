"""Seed data for the service catalog."""

from .domain import (
    Complexity,
    LocalizedText,
    PriceRange,
    Service,
    ServiceCategory,
    ServiceMetadata,
    SupportLevel,
)

CATEGORIES: tuple[ServiceCategory, ...] = (
    ServiceCategory(
        category_id="education",
        name=LocalizedText(en="Education", ru="Обучение"),
        description=LocalizedText(
            en="Blockchain development courses and training",
            ru="Курсы и тренинги по блокчейн-разработке",
        ),
        icon="AcademicCapIcon",
        display_order=1,
    ),
    ServiceCategory(
        category_id="development",
        name=LocalizedText(en="Development", ru="Разработка"),
        description=LocalizedText(
            en="Blockchain application and smart contract development",
            ru="Разработка блокчейн-приложений и смарт-контрактов",
        ),
        icon="CodeBracketIcon",
        display_order=2,
    ),
    ServiceCategory(
        category_id="consulting",
        name=LocalizedText(en="Consulting", ru="Консультации"),
        description=LocalizedText(
            en="Expert blockchain project consulting",
            ru="Экспертные консультации по блокчейн-проектам",
        ),
        icon="ChatBubbleLeftRightIcon",
        display_order=3,
    ),
    ServiceCategory(
        category_id="content",
        name=LocalizedText(en="Content", ru="Контент"),
        description=LocalizedText(
            en="Educational and technical content creation",
            ru="Создание образовательного и технического контента",
        ),
        icon="DocumentTextIcon",
        display_order=4,
    ),
)

SERVICES: tuple[Service, ...] = (
    # Education
    Service(
        service_id="rust-blockchain-course",
        category_id="education",
        name=LocalizedText(en="Rust for Blockchain Course", ru="Курс Rust для блокчейна"),
        short_description=LocalizedText(
            en="Intensive Rust course for blockchain application development",
            ru="Интенсивный курс по Rust для разработки блокчейн-приложений",
        ),
        full_description=LocalizedText(
            en=(
                "Complete Rust language course focused on blockchain development. "
                "Includes hands-on projects and real-world case studies."
            ),
            ru=(
                "Полный курс по изучению языка Rust с фокусом на блокчейн-разработку. "
                "Включает практические проекты и реальные кейсы."
            ),
        ),
        features=(
            "Video lessons with practical examples",
            "Hands-on coding exercises",
            "Real blockchain project development",
            "Code review and feedback",
            "Certificate of completion",
            "6 months access to materials",
        ),
        deliverables=(
            "Access to comprehensive video course",
            "Downloadable code examples",
            "Project templates and boilerplates",
            "Personal mentorship sessions",
            "Course completion certificate",
        ),
        timeline="8-12 weeks",
        price_range=PriceRange(
            min=800,
            max=1200,
            note=LocalizedText(en="Price depends on support level", ru="Цена зависит от уровня поддержки"),
        ),
        complexity=Complexity.ADVANCED,
        tags=frozenset({"rust", "blockchain", "education", "programming"}),
        is_popular=True,
        metadata=ServiceMetadata(
            estimated_delivery_days=84,
            support_level=SupportLevel.PREMIUM,
            team_size="1 instructor",
            display_order=1,
        ),
    ),
    Service(
        service_id="solidity-masterclass",
        category_id="education",
        name=LocalizedText(en="Solidity Masterclass", ru="Мастер-класс по Solidity"),
        short_description=LocalizedText(
            en="Advanced smart contract development course in Solidity",
            ru="Продвинутый курс по разработке смарт-контрактов на Solidity",
        ),
        full_description=LocalizedText(
            en=(
                "Deep dive into Solidity with focus on security, optimization, "
                "and smart contract development best practices."
            ),
            ru=(
                "Глубокое изучение Solidity с акцентом на безопасность, оптимизацию "
                "и лучшие практики разработки смарт-контрактов."
            ),
        ),
        features=(
            "Advanced Solidity patterns",
            "Security audit techniques",
            "Gas optimization strategies",
            "DeFi protocol development",
            "Testing and deployment",
            "Live coding sessions",
        ),
        deliverables=(
            "Video course library",
            "Smart contract templates",
            "Security checklist",
            "Deployment scripts",
            "Testing frameworks setup",
        ),
        timeline="6-8 weeks",
        price_range=PriceRange(min=600, max=900),
        complexity=Complexity.ADVANCED,
        tags=frozenset({"solidity", "ethereum", "smart-contracts", "defi"}),
        metadata=ServiceMetadata(
            estimated_delivery_days=56,
            support_level=SupportLevel.STANDARD,
            team_size="1 instructor",
            display_order=2,
        ),
    ),
    # Development
    Service(
        service_id="custom-blockchain-dev",
        category_id="development",
        name=LocalizedText(en="Custom Blockchain Development", ru="Разработка кастомного блокчейна"),
        short_description=LocalizedText(
            en="Build your own blockchain tailored to your requirements",
            ru="Создание собственного блокчейна под ваши требования",
        ),
        full_description=LocalizedText(
            en=(
                "Full-cycle custom blockchain development: from concept and architecture to "
                "implementation and deployment. Includes tokenomics, consensus, and ecosystem."
            ),
            ru=(
                "Полный цикл разработки кастомного блокчейна: от концепции и архитектуры до "
                "реализации и деплоя. Включает токеномику, консенсус и экосистему."
            ),
        ),
        features=(
            "Custom consensus mechanism",
            "Native token implementation",
            "Smart contract platform",
            "Explorer and wallet",
            "Network infrastructure",
            "Documentation and training",
        ),
        deliverables=(
            "Complete blockchain implementation",
            "Network deployment",
            "Block explorer",
            "Wallet application",
            "Technical documentation",
            "Team training sessions",
        ),
        timeline="6-12 months",
        price_range=PriceRange(
            min=50000,
            max=200000,
            note=LocalizedText(
                en="Depends on complexity and requirements",
                ru="Зависит от сложности и требований",
            ),
        ),
        complexity=Complexity.ENTERPRISE,
        tags=frozenset({"blockchain", "custom-development", "consensus", "tokenomics"}),
        metadata=ServiceMetadata(
            estimated_delivery_days=365,
            support_level=SupportLevel.PREMIUM,
            team_size="3-5 developers",
            requires_discovery=True,
            display_order=1,
        ),
    ),
    Service(
        service_id="defi-protocol-dev",
        category_id="development",
        name=LocalizedText(en="DeFi Protocol Development", ru="Разработка DeFi протокола"),
        short_description=LocalizedText(
            en="Build a full-featured DeFi protocol",
            ru="Создание DeFi протокола с полным набором функций",
        ),
        full_description=LocalizedText(
            en=(
                "Develop comprehensive DeFi protocol including smart contracts, frontend, "
                "tokenomics, and integrations with existing protocols."
            ),
            ru=(
                "Разработка комплексного DeFi протокола включая смарт-контракты, фронтенд, "
                "токеномику и интеграции с существующими протоколами."
            ),
        ),
        features=(
            "Smart contract architecture",
            "Frontend application",
            "Liquidity management",
            "Yield farming mechanisms",
            "Governance system",
            "Security audits",
        ),
        deliverables=(
            "Audited smart contracts",
            "Web application",
            "Mobile app (optional)",
            "Admin dashboard",
            "API documentation",
            "User guides",
        ),
        timeline="4-8 months",
        price_range=PriceRange(min=25000, max=80000),
        complexity=Complexity.ENTERPRISE,
        tags=frozenset({"defi", "smart-contracts", "yield-farming", "governance"}),
        is_popular=True,
        metadata=ServiceMetadata(
            estimated_delivery_days=240,
            support_level=SupportLevel.PREMIUM,
            team_size="4-6 developers",
            requires_discovery=True,
            display_order=2,
        ),
    ),
    # Consulting
    Service(
        service_id="basic-consultation",
        category_id="consulting",
        name=LocalizedText(en="Basic Consultation", ru="Базовая консультация"),
        short_description=LocalizedText(
            en="General blockchain development questions",
            ru="Общие вопросы по блокчейн-разработке",
        ),
        full_description=LocalizedText(
            en=(
                "Personal consultation on general blockchain development questions, "
                "technology selection, and architectural solutions."
            ),
            ru=(
                "Персональная консультация по общим вопросам блокчейн-разработки, "
                "выбору технологий и архитектурным решениям."
            ),
        ),
        features=(
            "Video conference 1 hour",
            "Project overview",
            "Technology recommendations",
            "Technical Q&A",
            "Brief report with recommendations",
        ),
        deliverables=(
            "One-hour consultation session",
            "Written recommendations report",
            "Follow-up email with resources",
        ),
        timeline="1 hour",
        price_range=PriceRange(min=150, max=150),
        complexity=Complexity.BASIC,
        tags=frozenset({"consultation", "architecture", "technology-selection"}),
        is_customizable=False,
        metadata=ServiceMetadata(
            estimated_delivery_days=1,
            support_level=SupportLevel.BASIC,
            team_size="1 consultant",
            display_order=1,
        ),
    ),
    Service(
        service_id="smart-contract-audit",
        category_id="consulting",
        name=LocalizedText(en="Smart Contract Audit", ru="Аудит смарт-контрактов"),
        short_description=LocalizedText(
            en="Detailed smart contract security audit",
            ru="Детальный аудит безопасности смарт-контрактов",
        ),
        full_description=LocalizedText(
            en=(
                "Comprehensive smart contract security audit with detailed report, "
                "vulnerability fix recommendations, and re-audit."
            ),
            ru=(
                "Комплексный аудит безопасности смарт-контрактов с детальным отчетом, "
                "рекомендациями по исправлению уязвимостей и повторной проверкой."
            ),
        ),
        features=(
            "Smart contract code analysis",
            "Security vulnerability detection",
            "Gas optimization review",
            "Detailed report with recommendations",
            "2 hours consultation on results",
            "Re-audit after fixes",
        ),
        deliverables=(
            "Comprehensive audit report",
            "Security recommendations",
            "Gas optimization suggestions",
            "Re-audit after fixes",
            "Certificate of audit completion",
        ),
        timeline="3-5 days",
        price_range=PriceRange(
            min=500,
            max=1500,
            note=LocalizedText(
                en="Depends on contract size and complexity",
                ru="Зависит от размера и сложности контрактов",
            ),
        ),
        complexity=Complexity.ADVANCED,
        tags=frozenset({"audit", "security", "smart-contracts", "vulnerability"}),
        is_popular=True,
        metadata=ServiceMetadata(
            estimated_delivery_days=5,
            support_level=SupportLevel.PREMIUM,
            team_size="1-2 auditors",
            requires_discovery=True,
            display_order=2,
        ),
    ),
    # Content
    Service(
        service_id="technical-blog-writing",
        category_id="content",
        name=LocalizedText(en="Technical Blog Writing", ru="Написание технических статей"),
        short_description=LocalizedText(
            en="High-quality technical content creation",
            ru="Создание качественного технического контента",
        ),
        full_description=LocalizedText(
            en=(
                "Professional technical article writing, tutorials, and documentation "
                "on blockchain technologies for your project."
            ),
            ru=(
                "Профессиональное написание технических статей, туториалов и документации "
                "по блокчейн-технологиям для вашего проекта."
            ),
        ),
        features=(
            "In-depth research",
            "Technical accuracy",
            "SEO optimization",
            "Code examples",
            "Visual diagrams",
            "Multiple revisions",
        ),
        deliverables=(
            "High-quality articles",
            "SEO-optimized content",
            "Code examples and snippets",
            "Technical diagrams",
            "Editorial calendar",
        ),
        timeline="1-2 weeks per article",
        price_range=PriceRange(
            min=200,
            max=800,
            note=LocalizedText(
                en="Per article, depends on length and complexity",
                ru="За статью, зависит от длины и сложности",
            ),
        ),
        complexity=Complexity.ADVANCED,
        tags=frozenset({"content", "technical-writing", "documentation", "seo"}),
        metadata=ServiceMetadata(
            estimated_delivery_days=14,
            support_level=SupportLevel.STANDARD,
            team_size="1 writer",
            display_order=1,
        ),
    ),
)
