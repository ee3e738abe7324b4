"""Built-in sample content: the water cycle, one level deep."""

from models.layer import VisualizationConfig


def _details(layer_id, name, background, parent_node_id, nodes):
    return {
        'id': layer_id,
        'name': name,
        'backgroundColor': background,
        'parentNodeId': parent_node_id,
        'nodes': [
            {'id': node_id, 'name': node_name, 'x': x, 'y': 0.5, 'radius': 0.1, 'color': color}
            for (node_id, node_name, color), x in zip(nodes, (0.25, 0.5, 0.75))
        ],
    }


WATER_CYCLE = {
    'rootLayerId': 'water-cycle',
    'layers': {
        'water-cycle': {
            'id': 'water-cycle',
            'name': 'Water Cycle',
            'backgroundColor': '#0f3460',
            'nodes': [
                {'id': 'evaporation', 'name': 'Evaporation', 'x': 0.25, 'y': 0.5, 'radius': 0.1,
                 'color': '#e94560', 'childLayerId': 'evaporation-details'},
                {'id': 'condensation', 'name': 'Condensation', 'x': 0.5, 'y': 0.5, 'radius': 0.1,
                 'color': '#16c784', 'childLayerId': 'condensation-details'},
                {'id': 'precipitation', 'name': 'Precipitation', 'x': 0.75, 'y': 0.5, 'radius': 0.1,
                 'color': '#0084ff', 'childLayerId': 'precipitation-details'},
            ],
        },
        'evaporation-details': _details(
            'evaporation-details', 'Evaporation Details', '#e94560', 'evaporation',
            [('solar-heat', 'Solar Heat', '#ffa500'),
             ('water-surface', 'Water Surface', '#00bfff'),
             ('vapor-formation', 'Vapor Formation', '#87ceeb')],
        ),
        'condensation-details': _details(
            'condensation-details', 'Condensation Details', '#16c784', 'condensation',
            [('cooling', 'Cooling', '#4169e1'),
             ('nucleation', 'Nucleation', '#6495ed'),
             ('cloud-formation', 'Cloud Formation', '#add8e6')],
        ),
        'precipitation-details': _details(
            'precipitation-details', 'Precipitation Details', '#0084ff', 'precipitation',
            [('rain', 'Rain', '#1e90ff'),
             ('snow', 'Snow', '#f0f8ff'),
             ('collection', 'Collection', '#00008b')],
        ),
    },
}


def water_cycle_config() -> VisualizationConfig:
    return VisualizationConfig.from_dict(WATER_CYCLE)
