"""Fixed vocabulary of technology tags a project may declare."""

TECHNOLOGY_TAGS = (
    "Angular",
    "AWS",
    "Azure",
    "Bootstrap",
    "C",
    "C#",
    "C++",
    "CSS",
    "Dart",
    "Django",
    "Docker",
    "Elixir",
    "Express",
    "Firebase",
    "Flask",
    "Flutter",
    "GCP",
    "Go",
    "GraphQL",
    "Haskell",
    "HTML",
    "Java",
    "JavaScript",
    "Kotlin",
    "Kubernetes",
    "Laravel",
    "MongoDB",
    "MySQL",
    "Next.js",
    "Node.js",
    "PHP",
    "PostgreSQL",
    "Python",
    "R",
    "React",
    "React Native",
    "Redis",
    "Ruby",
    "Ruby on Rails",
    "Rust",
    "Sass",
    "Scala",
    "Spring",
    "SQLite",
    "Svelte",
    "Swift",
    "Tailwind CSS",
    "TensorFlow",
    "TypeScript",
    "Vue",
)

# Lookup keyed by lowercase tag, used to accept "javascript" as "JavaScript"
_CANONICAL = {tag.lower(): tag for tag in TECHNOLOGY_TAGS}


def canonical_technology(tag: str):
    """Return the canonical spelling of `tag`, or None if it is not in the vocabulary."""
    return _CANONICAL.get(tag.strip().lower())
