"""TaxGenie — Old vs New regime income-tax estimator for Indian salaried individuals."""
