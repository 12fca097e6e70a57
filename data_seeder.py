import logging

from extensions import db
from models import Question

logger = logging.getLogger(__name__)

SAMPLE_QUESTIONS = [
    # Standard capitals
    {
        'mode': "capitals", 'region': "global",
        'question_text': "What is the capital of Australia?",
        'hint': "This city is located in the Australian Capital Territory.",
        'answer': "canberra", 'alternative_answers': [],
        'fun_fact': "Canberra was specifically designed and built to be Australia's capital city, chosen as a compromise between Sydney and Melbourne.",
        'difficulty': 2, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "global",
        'question_text': "What is the capital of Brazil?",
        'hint': "This planned city was built in the 1950s in the country's interior.",
        'answer': "brasilia", 'alternative_answers': ["brasília"],
        'fun_fact': "Brasília was designed by architect Oscar Niemeyer and urban planner Lúcio Costa, and was built in just 41 months!",
        'difficulty': 2, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "north-america",
        'question_text': "What is the capital of Canada?",
        'hint': "This city is located in Ontario, on the border with Quebec.",
        'answer': "ottawa", 'alternative_answers': [],
        'fun_fact': "Ottawa was chosen as Canada's capital by Queen Victoria in 1857, partly because it was less likely to be attacked by the United States!",
        'difficulty': 1, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "asia",
        'question_text': "What is the capital of Japan?",
        'hint': "This city was formerly known as Edo.",
        'answer': "tokyo", 'alternative_answers': ["tōkyō"],
        'fun_fact': "Tokyo became Japan's capital in 1868 when Emperor Meiji moved from Kyoto. The name means 'Eastern Capital.'",
        'difficulty': 1, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "asia",
        'question_text': "What is the capital of Kazakhstan?",
        'hint': "This city has been renamed twice since becoming the capital in 1997.",
        'answer': "astana", 'alternative_answers': ["nur-sultan", "nursultan"],
        'fun_fact': "The capital moved from Almaty to Astana in 1997. It was called Nur-Sultan from 2019 to 2022 before taking back its old name.",
        'difficulty': 4, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "asia",
        'question_text': "What is the capital of Myanmar?",
        'hint': "This city replaced Yangon as the capital in 2006.",
        'answer': "naypyidaw", 'alternative_answers': ["nay pyi taw"],
        'fun_fact': "Naypyidaw was built from scratch starting in 2002 and became Myanmar's capital in 2006. It's known for its wide, empty streets and government buildings.",
        'difficulty': 4, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "asia",
        'question_text': "What is the capital of Thailand?",
        'hint': "This city's full ceremonial name is the longest city name in the world.",
        'answer': "bangkok", 'alternative_answers': ["krung thep"],
        'fun_fact': "Bangkok's full ceremonial name has 169 letters and is listed in the Guinness Book of Records as the world's longest place name!",
        'difficulty': 1, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "africa",
        'question_text': "What is the capital of Morocco?",
        'hint': "This coastal city is known for its red walls and historic medina.",
        'answer': "rabat", 'alternative_answers': [],
        'fun_fact': "Rabat became Morocco's capital in 1912. Many people think it's Casablanca or Marrakech, but this quieter city has been the political center for over a century.",
        'difficulty': 3, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "africa",
        'question_text': "What is the capital of Nigeria?",
        'hint': "This planned city replaced Lagos as the capital in 1991.",
        'answer': "abuja", 'alternative_answers': [],
        'fun_fact': "Abuja was chosen as Nigeria's capital because of its central location and was specifically designed to be ethnically neutral for the diverse country.",
        'difficulty': 3, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "africa",
        'question_text': "What is the capital of Kenya?",
        'hint': "This city's name means 'cool water' in Maasai.",
        'answer': "nairobi", 'alternative_answers': [],
        'fun_fact': "Nairobi is the only capital city in the world with a national park within its boundaries - you can see lions with skyscrapers in the background!",
        'difficulty': 2, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "oceania",
        'question_text': "What is the capital of New Zealand?",
        'hint': "This city is located on the North Island and is known for its harbor.",
        'answer': "wellington", 'alternative_answers': [],
        'fun_fact': "Wellington is one of the windiest cities in the world and is the southernmost capital city of a sovereign state.",
        'difficulty': 2, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "oceania",
        'question_text': "What is the capital of Fiji?",
        'hint': "This city is located on the island of Viti Levu.",
        'answer': "suva", 'alternative_answers': [],
        'fun_fact': "Suva is the largest city in the South Pacific outside of Australia and New Zealand, and is known for its colonial architecture.",
        'difficulty': 3, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "europe",
        'question_text': "What is the capital of Estonia?",
        'hint': "This medieval city is known for its well-preserved Old Town.",
        'answer': "tallinn", 'alternative_answers': [],
        'fun_fact': "Tallinn's Old Town is a UNESCO World Heritage site and one of the best-preserved medieval cities in Europe.",
        'difficulty': 3, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "europe",
        'question_text': "What is the capital of Slovenia?",
        'hint': "This city is home to the famous Triple Bridge.",
        'answer': "ljubljana", 'alternative_answers': [],
        'fun_fact': "Ljubljana was named European Green Capital in 2016 and keeps its old town centre car-free.",
        'difficulty': 3, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "europe",
        'question_text': "What is the capital of Latvia?",
        'hint': "This city is famous for its Art Nouveau architecture.",
        'answer': "riga", 'alternative_answers': [],
        'fun_fact': "Riga has the largest collection of Art Nouveau buildings in the world, with over 800 buildings in this architectural style.",
        'difficulty': 3, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "south-america",
        'question_text': "What is the capital of Argentina?",
        'hint': "This city is famous for tango dancing and the colorful La Boca neighborhood.",
        'answer': "buenos aires", 'alternative_answers': [],
        'fun_fact': "Buenos Aires is often called the 'Paris of South America' due to its European-influenced architecture and culture.",
        'difficulty': 1, 'visual_type': "text",
    },
    {
        'mode': "capitals", 'region': "south-america",
        'question_text': "What is the capital of Chile?",
        'hint': "This city sits in a valley surrounded by the Andes mountains.",
        'answer': "santiago", 'alternative_answers': [],
        'fun_fact': "From Santiago you can ski in the nearby Andes and visit Pacific beaches on the same day!",
        'difficulty': 2, 'visual_type': "text",
    },
    # Hidden outlines
    {
        'mode': "hidden-outlines", 'region': "europe",
        'question_text': "Which European country has this distinctive boot shape?",
        'hint': "This Mediterranean country is famous for pasta, pizza, and the Roman Empire.",
        'answer': "italy", 'alternative_answers': [],
        'fun_fact': "Italy's boot shape is one of the most recognizable country outlines in the world. The 'boot' appears to be kicking the island of Sicily!",
        'difficulty': 1, 'visual_type': "outline",
    },
    {
        'mode': "hidden-outlines", 'region': "asia",
        'question_text': "Which Asian country looks like a long 'S' shape?",
        'hint': "This Southeast Asian country is famous for pho.",
        'answer': "vietnam", 'alternative_answers': ["viet nam"],
        'fun_fact': "Vietnam's S-shaped coastline stretches over 3,200 kilometers along the South China Sea.",
        'difficulty': 2, 'visual_type': "outline",
    },
    {
        'mode': "hidden-outlines", 'region': "south-america",
        'question_text': "Which country has this elongated shape along South America's western coast?",
        'hint': "This country is over 4,300 km long but averages only 180 km wide.",
        'answer': "chile", 'alternative_answers': [],
        'fun_fact': "Chile stretches over 4,300 kilometers from north to south but averages only 180 kilometers in width. It spans 38 degrees of latitude!",
        'difficulty': 2, 'visual_type': "outline",
    },
]


def seed_questions():
    """Insert the sample question bank if the questions table is empty.

    Returns the number of questions added.
    """
    if Question.query.first():
        logger.info("Question bank already populated, skipping seed")
        return 0

    try:
        for data in SAMPLE_QUESTIONS:
            db.session.add(Question(**data))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Seeded {len(SAMPLE_QUESTIONS)} sample questions")
    return len(SAMPLE_QUESTIONS)


if __name__ == '__main__':
    from app import app

    with app.app_context():
        # Clear existing data (be careful in production!)
        db.drop_all()
        db.create_all()
        seed_questions()
