"""App — coração do applet: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (logging, settings, wiring do applet)
- domain/: modelos (ações, activities, card, sessão, decisões)
- use_cases/: requisição, execução com retry, classificação, login, troca de card
- services/: AdaptiveApplet e implementações de hooks
- infra/: implementações concretas (canal HTTP, parser, host em memória)
- protocols/: contratos/interfaces
- observability/: correlação e métricas via logs estruturados

Padrão: app executa; fsm governa; config configura; utils apoia.
"""
