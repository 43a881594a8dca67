"""Built-in guided programs."""

from __future__ import annotations

from pagebound.programs.models import GuidedProgram

GUIDED_PROGRAMS: tuple[GuidedProgram, ...] = (
    GuidedProgram(
        id="gratitude-30",
        name="30 Days of Gratitude",
        description="Cultivate an attitude of appreciation",
        prompts=[
            "What's one thing you often take for granted but are grateful for?",
            "Write about someone who has positively impacted your life.",
            "What's a skill or ability you're thankful to have?",
            "Describe a place that brings you peace and comfort.",
            "What's a challenge you've overcome that you're now grateful for?",
            "Write about a recent small pleasure that made you smile.",
            "What's something in nature that fills you with wonder?",
            "Who in your life always makes you feel supported?",
            "What's a piece of technology you're grateful exists?",
            "Describe a memory that warms your heart.",
            "What's something about your body you appreciate?",
            "Write about a book, song, or movie that changed your perspective.",
            "What's a simple daily routine you're thankful for?",
            "Who's a stranger who once showed you unexpected kindness?",
            "What's something you have now that past-you would be thrilled about?",
            "Describe a lesson learned from a difficult experience.",
            "What's an opportunity you're grateful to have had?",
            "Write about a pet or animal that has brought joy to your life.",
            "What's something about where you live that you appreciate?",
            "Who's a teacher or mentor you're grateful for?",
            "What's a comfort food and the memories it brings?",
            "Describe a friendship that has stood the test of time.",
            "What's a cultural tradition you value?",
            "Write about a time when everything worked out better than expected.",
            "What's something you love about the current season?",
            "Who always believes in you, even when you doubt yourself?",
            "What's a freedom or right you're grateful to have?",
            "Describe your favorite part of your daily routine.",
            "What's something that made you laugh recently?",
            "Looking back, what three things are you most grateful for from this month?",
        ],
    ),
    GuidedProgram(
        id="mindfulness-21",
        name="21 Days of Mindfulness",
        description="Develop present-moment awareness",
        prompts=[
            "Describe this present moment using all five senses.",
            "What thoughts keep replaying in your mind? Observe them without judgment.",
            "Write about your breath. Notice its rhythm and depth.",
            "What emotions are you carrying right now? Where do you feel them in your body?",
            "Describe one ordinary activity you did today with full attention.",
            "What's one thing you noticed today that you usually overlook?",
            "Write about a moment when you felt truly present recently.",
            "What distracts you most often? How can you gently redirect your focus?",
            "Describe the space around you in detail right now.",
            "What thoughts are you letting go of today?",
            "Write about eating one meal mindfully. What did you notice?",
            "How does your body feel in this moment? Scan from head to toe.",
            "What sounds can you hear right now? Near and far?",
            "Describe a conversation you had with full presence.",
            "What patterns in your thinking have you noticed this week?",
            "Write about walking somewhere today. What did you observe?",
            "What are you grateful for in this exact moment?",
            "How has being more mindful affected your daily life?",
            "What emotions came up today? How did you respond to them?",
            "Describe a moment of stillness you experienced recently.",
            "Reflecting on these 21 days, how has your awareness changed?",
        ],
    ),
    GuidedProgram(
        id="confidence-14",
        name="14 Days to Confidence",
        description="Build self-esteem and inner strength",
        prompts=[
            "Write about a time when you surprised yourself with your own capability.",
            "What are ten things you genuinely like about yourself?",
            "Describe a compliment you received that was hard to accept. Why?",
            "What's a fear you've conquered? How did you do it?",
            "Write a letter of encouragement to yourself.",
            "What negative self-talk do you want to replace? With what?",
            "Describe a moment when you stood up for yourself.",
            "What accomplishment are you most proud of?",
            "Write about someone who inspires confidence in you.",
            "What would you attempt if you were confident enough?",
            "How do you handle criticism? How would you like to handle it?",
            "Describe your strengths as if you were recommending yourself for something.",
            "What's one small step you can take today to build confidence?",
            "Looking back on these two weeks, how has your self-perception changed?",
        ],
    ),
)


def get_program(program_id: str) -> GuidedProgram | None:
    """Return a built-in program by id, or ``None``."""
    return next((p for p in GUIDED_PROGRAMS if p.id == program_id), None)
