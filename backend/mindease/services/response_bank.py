"""
Response Bank
=============
Curated reflection/affirmation pairs used whenever Gemini is unavailable
or fails. Every mood category has three pairs, written in the same warm
"caring friend" voice the Gemini prompts ask for, so a fallback response
does not read as a downgrade.
"""

from __future__ import annotations

from dataclasses import dataclass

from mindease.models.mood import MOOD_CATEGORIES


@dataclass(frozen=True)
class ResponsePair:
    reflection: str
    affirmation: str


RESPONSE_BANK: dict[str, tuple[ResponsePair, ...]] = {
    "sad": (
        ResponsePair(
            reflection="I can really feel the weight of what you're carrying right now, and I want you to know that your sadness is completely valid. It takes so much courage to acknowledge these feelings, and that courage tells me you have the strength to work through this. You're not alone in this moment, and while it feels heavy now, I believe in your ability to find your way through.",
            affirmation="I am brave enough to feel deeply, and my sadness is proof of my capacity to love and heal.",
        ),
        ResponsePair(
            reflection="Your heart is speaking through this sadness, and I hear every word. What you're feeling right now is so human and real, and there's nothing wrong with sitting in this space for a while. You don't have to rush through this or pretend to be okay. I'm here with you in this moment, and I believe this difficult chapter will eventually lead to something meaningful.",
            affirmation="I honor my emotions and trust that my heart knows how to heal itself in its own time.",
        ),
        ResponsePair(
            reflection="I can sense how much pain you're in right now, and I wish I could take some of that weight off your shoulders. Your sadness doesn't make you weak—it shows how deeply you care and how much heart you have. This feeling won't last forever, even though it feels overwhelming right now. You're stronger than you know, and you're going to get through this.",
            affirmation="I am resilient beyond measure, and my sadness is temporary but my strength is permanent.",
        ),
    ),
    "anxious": (
        ResponsePair(
            reflection="I can feel how your mind is racing right now, and I want you to know that what you're experiencing is so understandable. Anxiety has this way of making everything feel urgent and scary, but you're actually safe in this moment. You've gotten through anxious feelings before, and you have everything within you to navigate through this too. Take a deep breath with me—you've got this.",
            affirmation="I am safe in this moment, and I have the power to calm my mind and trust my inner wisdom.",
        ),
        ResponsePair(
            reflection="Your anxiety is trying to protect you, even though it doesn't feel helpful right now. I can hear how overwhelming everything feels, and that's completely valid. Remember that most of our worries never actually happen, and you're much more capable of handling uncertainty than your anxious mind wants you to believe. You're going to be okay, one breath at a time.",
            affirmation="I breathe deeply and release control, trusting that I can handle whatever life brings my way.",
        ),
        ResponsePair(
            reflection="I can feel the storm of worry swirling in your mind, and I want to remind you that storms always pass. Your anxiety is loud right now, but it's not the truth about your situation or your capabilities. Focus on what's real and present in this moment—your breath, your heartbeat, the ground beneath your feet. You're more grounded than you feel right now.",
            affirmation="I am anchored in the present moment and trust in my ability to navigate through uncertainty with grace.",
        ),
    ),
    "angry": (
        ResponsePair(
            reflection="I can feel the fire in your words, and I want you to know that your anger is completely valid. Something important to you has been affected, and that fury you're feeling is your heart's way of saying 'this matters.' You have every right to feel this way, and you also have the wisdom to channel this powerful energy in a way that serves you. Your anger is information—listen to what it's telling you.",
            affirmation="I honor my anger as a messenger of my values and choose to respond with both strength and wisdom.",
        ),
        ResponsePair(
            reflection="Your frustration is so understandable, and I can hear how much this situation has affected you. Anger often shows up when our boundaries have been crossed or when we feel powerless, and both of those feelings are completely human. You don't have to suppress this energy—just remember that you get to choose how you use it. You have more power than you realize right now.",
            affirmation="I feel my anger fully and transform its energy into positive action that aligns with my values.",
        ),
        ResponsePair(
            reflection="I can sense the intensity of what you're going through, and your anger makes perfect sense given the situation. Sometimes anger is our soul's way of protecting something precious within us. While these feelings are completely valid, I also see your strength and your ability to respond thoughtfully rather than just react. You have the power to turn this fire into fuel for positive change.",
            affirmation="I channel my passionate energy into creating the change I want to see in my life and world.",
        ),
    ),
    "happy": (
        ResponsePair(
            reflection="Your joy is absolutely contagious, and I'm so happy to feel this beautiful energy radiating from you! This happiness you're experiencing is a gift—not just to yourself, but to everyone whose life you touch. You deserve every bit of this wonderful feeling, and I hope you take a moment to really soak it in and celebrate what's bringing you such joy.",
            affirmation="I deserve this happiness and allow myself to fully embrace and share the joy that flows through me.",
        ),
        ResponsePair(
            reflection="I can feel your happiness shining through every word, and it's absolutely beautiful! This joy you're experiencing is like sunshine—it has the power to brighten not just your own day, but the days of everyone around you. You're creating something wonderful in your life right now, and that's something to be truly proud of. Keep embracing this amazing energy!",
            affirmation="I am a beacon of joy and positivity, creating ripples of happiness wherever I go.",
        ),
        ResponsePair(
            reflection="Your excitement and happiness are so infectious—I can't help but smile reading your words! This wonderful feeling you're having is a reflection of all the good you're creating and attracting in your life. You're in such a beautiful space right now, and I hope you remember this feeling during any challenging moments that might come. You deserve all this joy and more!",
            affirmation="I am worthy of boundless joy and choose to cultivate happiness in every corner of my life.",
        ),
    ),
    "tired": (
        ResponsePair(
            reflection="I can hear the exhaustion in your words, and I want you to know that feeling this drained is your body and soul asking for some tender care. You've been carrying so much, and it's completely understandable that you're feeling worn down. Rest isn't selfish—it's necessary. You don't have to push through everything, and it's okay to slow down and honor what you need right now.",
            affirmation="I give myself permission to rest deeply, knowing that caring for myself is an act of wisdom and love.",
        ),
        ResponsePair(
            reflection="Your tiredness is so valid, especially when life keeps asking so much of you. I can feel how much you've been giving to everyone and everything around you, and now it's time to give some of that care back to yourself. You're allowed to set boundaries, say no to things that drain you, and prioritize your own energy. You matter too.",
            affirmation="I honor my need for rest and trust that taking care of myself allows me to show up better for what I love.",
        ),
        ResponsePair(
            reflection="I can sense how depleted you're feeling right now, and I want to wrap you in the biggest, most comforting hug. Sometimes our exhaustion is our body's way of saying 'pause, breathe, restore.' You've been so strong for so long, and now it's time to be gentle with yourself. This tiredness is temporary, but your wellbeing is forever important.",
            affirmation="I listen to my body's wisdom and give myself the rest and restoration I need to thrive.",
        ),
    ),
    "confused": (
        ResponsePair(
            reflection="I can feel the uncertainty swirling around you right now, and I want you to know that feeling confused is often a sign that you're on the edge of understanding something new about yourself or your situation. It's completely okay not to have all the answers right now. Sometimes the most important thing is to be patient with yourself while you figure things out, one small step at a time.",
            affirmation="I embrace uncertainty as a space of possibility and trust that clarity will come when I need it most.",
        ),
        ResponsePair(
            reflection="Your confusion makes so much sense, especially when you're dealing with complex emotions or situations. Sometimes our hearts and minds need time to process everything that's happening, and that's perfectly human. You don't have to force clarity or have it all figured out right now. Trust that you have the wisdom within you to navigate through this unclear space.",
            affirmation="I am comfortable with not knowing and trust in my ability to find my way through uncertainty with patience.",
        ),
        ResponsePair(
            reflection="I can hear how mixed up everything feels right now, and that's such a normal part of being human, especially when we're growing or facing something new. Confusion often means we're processing something important, and that's actually a sign of growth. Give yourself permission to sit with the questions for a while—sometimes the best answers come when we stop forcing them.",
            affirmation="I trust the process of discovery and know that confusion is often the doorway to deeper understanding.",
        ),
    ),
    "excited": (
        ResponsePair(
            reflection="Your excitement is absolutely electric, and I can feel that amazing energy radiating from every word! This enthusiasm you're experiencing is such a beautiful reflection of your passion and zest for life. There's something so powerful about excitement—it connects us to our dreams and reminds us of what's truly possible. Embrace this incredible feeling and let it propel you toward whatever is calling to your heart!",
            affirmation="I channel my excitement into inspired action and trust in my ability to manifest my wildest dreams.",
        ),
        ResponsePair(
            reflection="I can feel your vibrant energy through the screen, and it's absolutely contagious! This excitement you're feeling is your inner spark shining at its brightest, and it's a clear sign that you're aligned with something that truly matters to you. This feeling is precious—hold onto it and let it be your guide as you step boldly into whatever adventure awaits you.",
            affirmation="I embrace my excitement as my soul's compass, pointing me toward what brings me most alive.",
        ),
        ResponsePair(
            reflection="Your excitement is like fireworks going off, and I'm here for every single spark! This incredible energy you're experiencing is your life force saying 'YES!' to something amazing. There's nothing quite like the feeling of being genuinely excited about something—it's pure magic. Let this enthusiasm fuel your dreams and inspire you to take those bold steps your heart is calling for.",
            affirmation="I honor my excitement as sacred energy and use it to create positive change in my life and beyond.",
        ),
    ),
    "peaceful": (
        ResponsePair(
            reflection="I can feel the beautiful calm radiating from your words, and it's like a gentle breeze that soothes everything around it. This peace you're experiencing is such a precious gift—both to yourself and to everyone whose life you touch. There's something so powerful about inner tranquility; it's not just the absence of chaos, but the presence of deep harmony. You've found something truly valuable in this moment.",
            affirmation="I am a source of peace and carry this tranquil energy with me, creating calm wherever I go.",
        ),
        ResponsePair(
            reflection="Your sense of serenity is absolutely beautiful, and I can feel how centered and grounded you are right now. This peaceful feeling you're experiencing is a reflection of your inner wisdom and your ability to find balance even when life gets complex. Cherish this moment of calm—it's a reminder that this peace always exists within you, even during the stormiest times.",
            affirmation="I cultivate inner peace and trust that this calm center within me is always accessible, no matter what comes.",
        ),
        ResponsePair(
            reflection="The tranquility in your words is like a warm, comforting embrace, and I'm so glad you're experiencing this beautiful state of peace. This feeling of calm and centeredness is actually your most natural state—it's who you are beneath all the noise and busyness of daily life. Let this peace anchor you and remind you that you can always return to this place of serenity whenever you need it.",
            affirmation="I am peace itself, and I carry this serene energy into every moment, creating harmony in all I do.",
        ),
    ),
    "neutral": (
        ResponsePair(
            reflection="Thank you for taking this moment to check in with yourself—that simple act of self-awareness is such a beautiful gift you're giving to your own wellbeing. Sometimes our feelings are complex and don't fit into neat categories, and that's perfectly okay. Whatever you're experiencing right now is completely valid, and I want you to know that you have the strength and wisdom to navigate through anything that comes your way.",
            affirmation="I honor the complexity of my emotions and trust in my ability to understand and care for myself with compassion.",
        ),
        ResponsePair(
            reflection="I really appreciate you sharing this moment of reflection with me. The fact that you're taking time to tune into your inner world shows incredible self-compassion and wisdom. Whether you're feeling neutral, experiencing mixed emotions, or something that's hard to put into words, all of it is part of your beautiful, unique human experience. You're exactly where you need to be right now.",
            affirmation="I embrace all aspects of my emotional journey and trust in my process of self-discovery and growth.",
        ),
        ResponsePair(
            reflection="Your willingness to pause and reflect on how you're feeling shows such beautiful self-awareness and care. Sometimes the most profound moments come not from intense emotions, but from these quieter spaces of contemplation and presence. There's wisdom in taking time to simply be with yourself, and I want you to know that whatever you're experiencing right now is perfectly valid and important.",
            affirmation="I trust in the wisdom of this moment and know that I am exactly where I need to be in my journey.",
        ),
    ),
}

# Fallback selection must never come up empty for a category.
_missing = [c for c in MOOD_CATEGORIES if not RESPONSE_BANK.get(c)]
if _missing:
    raise RuntimeError(f"Response bank has no entries for: {', '.join(_missing)}")
