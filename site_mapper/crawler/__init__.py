"""site_mapper.crawler: обход сайта, загрузка страниц и извлечение ссылок."""
