"""Prompt for blog topic ideas."""

TOPICS_SYSTEM_PROMPT = (
    "Você é um estrategista de conteúdo de um blog de uma empresa de reformas residenciais."
)

TOPICS_PROMPT = """Gere {count} ideias de tópicos para um blog de uma empresa de reformas residenciais {focus_text}.
Os tópicos devem ser relevantes para o público interessado em reformas e devem considerar:
- Tendências atuais em design de interiores
- Dicas práticas para reformas
- Reformas com baixo orçamento
- Sustentabilidade e materiais ecológicos
- Comparação de materiais ou soluções
{focus_rule}
Retorne apenas os títulos dos tópicos, separados por vírgulas.
Certifique-se de que os títulos são otimizados para SEO e envolventes."""

FOCUS_TEXT = 'com foco especial em "{focus}"'
FOCUS_RULE = 'Todos os tópicos DEVEM estar relacionados a "{focus}" de alguma forma.\n'
