"""Infrastructure layer - HTTP connectors, platform services and persistence."""
